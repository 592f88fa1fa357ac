import os
from pathlib import Path

from tinc.paths import has_drive, to_abs_path


def test_relative_path_joined_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert to_abs_path("a/b.txt") == os.path.join(str(Path.cwd()), "a", "b.txt")


def test_relative_path_is_normalized(tmp_path):
    assert to_abs_path("a/../b/./c.txt", cwd=tmp_path) == os.path.join(str(tmp_path), "b", "c.txt")


def test_explicit_cwd(tmp_path):
    assert to_abs_path("x", cwd=tmp_path) == os.path.join(str(tmp_path), "x")


def test_absolute_path_unchanged():
    assert to_abs_path("/etc/../etc/hosts") == "/etc/../etc/hosts"


def test_home_paths_unchanged():
    assert to_abs_path("~") == "~"
    assert to_abs_path("~/conf/app.yaml") == "~/conf/app.yaml"


def test_drive_paths_unchanged():
    assert to_abs_path("C:\\templates\\a.tmpl") == "C:\\templates\\a.tmpl"
    assert has_drive("D:\\x")
    assert has_drive("E:/templates/a.tmpl")
    assert not has_drive("relative/path")


def test_colon_in_relative_name_is_not_a_drive(tmp_path):
    assert not has_drive("a:b")
    assert not has_drive("host:8080/conf")
    assert to_abs_path("a:b", cwd=tmp_path) == os.path.join(str(tmp_path), "a:b")


def test_accepts_pathlike(tmp_path):
    assert to_abs_path(Path("x.txt"), cwd=tmp_path) == os.path.join(str(tmp_path), "x.txt")
