"""Tests for the result store."""

import threading

from lazy_crc.sfv.store import BadFileReason, BadFileRecord, FileEntry, ResultStore


class TestResultStore:
    """Tests for path -> checksum mapping."""

    def test_entries_sorted_by_path(self):
        """Test that entries come back in lexicographic path order."""
        store = ResultStore()
        store.add("b.txt", 2)
        store.add("a/z.txt", 1)
        store.add("A.txt", 3)

        assert [entry.path for entry in store.entries()] == ["A.txt", "a/z.txt", "b.txt"]

    def test_first_insert_wins(self):
        """Test that a duplicate path keeps the first checksum."""
        store = ResultStore()

        assert store.add("file.txt", 0x11111111) is True
        assert store.add("file.txt", 0x22222222) is False

        assert store.get("file.txt") == 0x11111111
        assert len(store) == 1

    def test_entries_exclude_does_not_mutate(self):
        """Test that excluding a path leaves the store untouched."""
        store = ResultStore()
        store.add("data.sfv", 1)
        store.add("file.txt", 2)

        assert store.entries(exclude={"data.sfv"}) == [FileEntry("file.txt", 2)]
        assert "data.sfv" in store
        assert len(store.entries()) == 2

    def test_file_entry_hex(self):
        """Test hex rendering of an entry."""
        assert FileEntry("a", 0xCBF43926).crc32_hex == "CBF43926"
        assert FileEntry("a", 0).crc32_hex == "00000000"

    def test_concurrent_inserts(self):
        """Test that concurrent inserts neither lose nor duplicate keys."""
        store = ResultStore()
        winners = []
        winners_lock = threading.Lock()

        def _insert(worker_id: int) -> None:
            for i in range(200):
                if store.add(f"file{i:03d}", worker_id):
                    with winners_lock:
                        winners.append(i)

        threads = [threading.Thread(target=_insert, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store) == 200
        assert sorted(winners) == list(range(200))


class TestBadFileLog:
    """Tests for the bad-file log."""

    def test_discovery_order_and_duplicates_kept(self):
        """Test that records are never reordered or deduplicated."""
        store = ResultStore()
        store.add_bad_file("z.txt", BadFileReason.OPEN_FAILED)
        store.add_bad_file("a.txt", BadFileReason.CHECKSUM_MISMATCH)
        store.add_bad_file("z.txt", BadFileReason.OPEN_FAILED)

        assert store.bad_files == [
            BadFileRecord("z.txt", BadFileReason.OPEN_FAILED),
            BadFileRecord("a.txt", BadFileReason.CHECKSUM_MISMATCH),
            BadFileRecord("z.txt", BadFileReason.OPEN_FAILED),
        ]

    def test_bad_files_returns_copy(self):
        """Test that callers cannot modify the log through the property."""
        store = ResultStore()
        store.add_bad_file("a.txt", BadFileReason.SIZE_UNAVAILABLE)

        store.bad_files.clear()

        assert len(store.bad_files) == 1

    def test_reason_text(self):
        """Test reason values used in the report."""
        assert BadFileReason.OPEN_FAILED.value == "open-failed"
        assert BadFileReason.SIZE_UNAVAILABLE.value == "size-unavailable"
        assert BadFileReason.CHECKSUM_MISMATCH.value == "checksum-mismatch"
