"""Tests for backup code management."""

from __future__ import annotations

import re

import pytest

from stepauth_core.mfa.backup import BackupCodesManager, generate_backup_code, hash_backup_code


@pytest.fixture
def manager():
    return BackupCodesManager(num_codes=5)


def test_code_format():
    assert re.match(r"^[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}$", generate_backup_code())


def test_hash_normalizes():
    assert hash_backup_code("abcd-ef01-2345") == hash_backup_code("ABCD EF01 2345")


class TestBackupCodesManager:

    def test_generate(self, manager):
        codes = manager.generate("a@x.com")

        assert len(codes) == 5
        assert len(set(codes)) == 5
        assert manager.remaining("a@x.com") == 5

    def test_plaintext_not_stored(self, manager):
        codes = manager.generate("a@x.com")
        stored = manager.store.get("a@x.com")

        assert codes[0] not in stored.code_hashes
        assert hash_backup_code(codes[0]) in stored.code_hashes

    def test_consume_once(self, manager):
        codes = manager.generate("a@x.com")

        assert manager.consume("a@x.com", codes[0])
        assert not manager.consume("a@x.com", codes[0])
        assert manager.remaining("a@x.com") == 4

    def test_consume_is_case_insensitive(self, manager):
        codes = manager.generate("a@x.com")
        assert manager.consume("a@x.com", codes[1].lower())

    def test_unknown_code(self, manager):
        manager.generate("a@x.com")
        assert not manager.consume("a@x.com", "0000-0000-0000")

    def test_no_codes(self, manager):
        assert not manager.consume("a@x.com", "0000-0000-0000")
        assert manager.remaining("a@x.com") == 0

    def test_regenerate_invalidates_old_set(self, manager):
        old = manager.generate("a@x.com")
        new = manager.generate("a@x.com")

        assert not manager.consume("a@x.com", old[0])
        assert manager.consume("a@x.com", new[0])
        assert manager.store.get("a@x.com").generation_count == 2

    def test_delete(self, manager):
        codes = manager.generate("a@x.com")

        assert manager.delete("a@x.com")
        assert not manager.consume("a@x.com", codes[0])
