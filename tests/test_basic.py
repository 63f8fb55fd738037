import os
import pwd
import socket
import time

from deskkit import basic


def test_cat_first_line(tmp_path):
    path = tmp_path / "f"
    path.write_text("hello\nworld\n")
    assert basic.cat(str(path)) == "hello"


def test_cat_without_newline(tmp_path):
    path = tmp_path / "f"
    path.write_text("value")
    assert basic.cat(str(path)) == "value"


def test_cat_empty_file(tmp_path):
    path = tmp_path / "f"
    path.write_text("")
    assert basic.cat(str(path)) is None


def test_cat_missing(tmp_path, capsys):
    assert basic.cat(str(tmp_path / "missing")) is None
    assert "fopen" in capsys.readouterr().err


def test_datetime_matches_strftime():
    before = time.strftime("%Y")
    assert basic.datetime("%Y") in {before, time.strftime("%Y")}


def test_datetime_empty_format(capsys):
    assert basic.datetime("") is None
    assert "strftime" in capsys.readouterr().err


def test_disk_perc_in_range(tmp_path):
    value = int(basic.disk_perc(str(tmp_path)))
    assert 0 <= value <= 100


def test_disk_sizes_are_binary(tmp_path):
    for func in (basic.disk_free, basic.disk_total, basic.disk_used):
        number, _prefix = func(str(tmp_path)).split(" ")
        assert 0 <= float(number) < 1024


def test_disk_missing(tmp_path, capsys):
    assert basic.disk_total(str(tmp_path / "missing")) is None
    assert "statvfs" in capsys.readouterr().err


def test_num_files(tmp_path):
    for name in ("a", "b", ".c"):
        (tmp_path / name).write_text("")
    assert basic.num_files(str(tmp_path)) == "3"


def test_num_files_missing(tmp_path):
    assert basic.num_files(str(tmp_path / "missing")) is None


def test_run_command_first_line():
    assert basic.run_command("printf 'one\\ntwo\\n'") == "one"


def test_run_command_no_output():
    assert basic.run_command("true") is None


def test_user_ids():
    assert basic.gid() == str(os.getgid())
    assert basic.uid() == str(os.geteuid())
    assert basic.username() == pwd.getpwuid(os.geteuid()).pw_name


def test_host_and_kernel():
    assert basic.hostname() == socket.gethostname()
    assert basic.kernel_release() == os.uname().release