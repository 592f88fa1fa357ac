import os
import stat

import pytest

from tinc.sink import atomic_write_text, resolve_output, write_output


def test_write_to_stdout(capsys):
    write_output("hello\n")
    assert capsys.readouterr().out == "hello\n"


def test_write_to_file_relative_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_output("rendered", output="out/result.yaml")

    assert (tmp_path / "out" / "result.yaml").read_text() == "rendered"


def test_write_truncates_existing_file(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("a much longer previous content")

    write_output("short", output=target)

    assert target.read_text() == "short"


def test_no_temp_files_left(tmp_path):
    target = tmp_path / "out.txt"
    write_output("x", output=target)
    assert os.listdir(tmp_path) == ["out.txt"]


def test_failed_replace_keeps_previous_file(tmp_path, monkeypatch):
    target = tmp_path / "out.txt"
    target.write_text("previous")

    def fail(*args, **kwargs):
        raise OSError("disk on fire")

    monkeypatch.setattr(os, "replace", fail)

    with pytest.raises(OSError):
        atomic_write_text(target, "new")

    assert target.read_text() == "previous"
    assert os.listdir(tmp_path) == ["out.txt"]


def test_resolve_output(tmp_path):
    assert resolve_output("a.txt", cwd=tmp_path) == tmp_path / "a.txt"
    assert resolve_output(tmp_path / "b.txt") == tmp_path / "b.txt"


@pytest.fixture
def umask_022():
    old = os.umask(0o022)
    yield
    os.umask(old)


def test_new_file_mode_follows_umask(tmp_path, umask_022):
    target = tmp_path / "out.yaml"

    write_output("x", output=target)

    assert stat.S_IMODE(target.stat().st_mode) == 0o644


def test_replaced_file_keeps_its_mode(tmp_path, umask_022):
    target = tmp_path / "run.sh"
    target.write_text("#!/bin/sh\nold\n")
    target.chmod(0o755)

    write_output("#!/bin/sh\nnew\n", output=target)

    assert target.read_text() == "#!/bin/sh\nnew\n"
    assert stat.S_IMODE(target.stat().st_mode) == 0o755
