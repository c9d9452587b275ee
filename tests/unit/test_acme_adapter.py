from __future__ import annotations

import os

import pytest

from acmecrypt.acme import TAG_MARKER, create_window, current_window_id, read_current_window
from acmecrypt.errors import CryptIOError, NotInEditorError
from tests.fakes import FakeTransport


def test_create_window_names_tags_and_fills_body():
    transport = FakeTransport(next_id=4)
    win_id = create_window("/home/u/notes", b"dear diary\n", transport=transport)

    assert win_id == 4
    win = transport.windows[4]
    assert win["ctl"] == ["name /home/u/notes\n"]
    assert win["tag"] == TAG_MARKER.encode()
    assert win["body"] == b"dear diary\n"
    assert transport.released == [4]


@pytest.mark.parametrize("failing", ["name", "tag", "body"])
def test_create_window_deletes_window_when_a_step_fails(failing):
    transport = FakeTransport()
    transport.fail_on.add(failing)

    with pytest.raises(CryptIOError):
        create_window("/x", b"data", transport=transport)

    assert transport.deleted == [1]
    assert transport.windows == {}
    assert transport.released == [1]


def test_create_window_keeps_undecodable_name_bytes():
    transport = FakeTransport()
    name = os.fsdecode(b"/tmp/caf\xe9")

    win_id = create_window(name, b"x", transport=transport)

    assert os.fsencode(transport.windows[win_id]["ctl"][0]) == b"name /tmp/caf\xe9\n"
    assert transport.deleted == []


def test_create_window_unencodable_name_deletes_window():
    transport = FakeTransport()

    with pytest.raises(CryptIOError, match="failed to set window name"):
        create_window("/tmp/bad\ud800", b"x", transport=transport)

    assert transport.deleted == [1]
    assert transport.windows == {}
    assert transport.released == [1]


def test_create_window_without_acme():
    transport = FakeTransport()
    transport.fail_on.add("new")
    with pytest.raises(CryptIOError, match="failed to create acme window"):
        create_window("/x", b"", transport=transport)
    assert transport.windows == {}


@pytest.mark.parametrize("env", [{}, {"winid": ""}, {"winid": "abc"}])
def test_current_window_id_requires_winid(env):
    with pytest.raises(NotInEditorError):
        current_window_id(env)


def test_current_window_id_parses():
    assert current_window_id({"winid": "42"}) == 42


def test_read_current_window_relative_name(tmp_path):
    transport = FakeTransport()
    transport.add_window(9, tag=b"notes Del Snarf Undo | Look CryptPut ", body=b"body text")

    content, name = read_current_window(transport=transport, environ={"winid": "9"}, cwd=str(tmp_path))
    assert content == b"body text"
    assert name == os.path.join(str(tmp_path), "notes")
    assert transport.released == [9]


def test_read_current_window_absolute_name_from_env(monkeypatch):
    transport = FakeTransport()
    transport.add_window(2, tag=b"/abs/notes Del", body=b"")
    monkeypatch.setenv("winid", "2")
    assert read_current_window(transport=transport) == (b"", "/abs/notes")


def test_read_current_window_empty_tag_still_closes():
    transport = FakeTransport()
    transport.add_window(3, tag=b"   ", body=b"x")
    with pytest.raises(CryptIOError, match="empty tag"):
        read_current_window(transport=transport, environ={"winid": "3"})
    assert transport.released == [3]


def test_read_current_window_body_failure_closes():
    transport = FakeTransport()
    transport.add_window(3, tag=b"/n", body=b"x")
    transport.fail_on.add("body")
    with pytest.raises(CryptIOError, match="body"):
        read_current_window(transport=transport, environ={"winid": "3"})
    assert transport.released == [3]


def test_read_current_window_unknown_id():
    with pytest.raises(CryptIOError, match="failed to open acme window 8"):
        read_current_window(transport=FakeTransport(), environ={"winid": "8"})


def test_read_current_window_keeps_undecodable_name_bytes():
    transport = FakeTransport()
    transport.add_window(5, tag=b"/tmp/caf\xe9 Del Snarf", body=b"b")

    _, name = read_current_window(transport=transport, environ={"winid": "5"})
    assert os.fsencode(name) == b"/tmp/caf\xe9"
