import os
import time

from scheduler import cleanup_expired_exports


def _touch(path, age_hours, now):
    path.write_bytes(b"PK")
    stamp = now - age_hours * 3600
    os.utime(path, (stamp, stamp))


def test_cleanup_removes_only_expired_workbooks(tmp_path):
    now = time.time()
    _touch(tmp_path / "old.xlsx", 30, now)
    _touch(tmp_path / "fresh.xlsx", 2, now)
    _touch(tmp_path / "old.txt", 30, now)

    removed = cleanup_expired_exports(str(tmp_path), ttl_hours=24, now=now)

    assert removed == 1
    assert sorted(os.listdir(tmp_path)) == ["fresh.xlsx", "old.txt"]


def test_cleanup_missing_directory(tmp_path):
    assert cleanup_expired_exports(str(tmp_path / "nope"), ttl_hours=1) == 0
