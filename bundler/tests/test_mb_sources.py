#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from mb_sources import SourceText, UnreadableSourceError, decode_source, load_sources, read_source


def test_decode_source_utf8():
    source = decode_source("mem", "@package café\n".encode("utf-8"))

    assert source == SourceText(origin="mem", text="@package café\n")


def test_decode_source_rejects_invalid_bytes():
    with pytest.raises(UnreadableSourceError) as excinfo:
        decode_source("mem", b"class \xff { }")

    assert excinfo.value.origin == "mem"
    assert "not valid utf-8" in excinfo.value.reason
    assert "[SRC-0010]" in str(excinfo.value)


def test_decode_source_unknown_encoding():
    with pytest.raises(UnreadableSourceError):
        decode_source("mem", b"class A { }", encoding="no-such-codec")


def test_read_source_missing_file(temp_project):
    with pytest.raises(UnreadableSourceError) as excinfo:
        read_source(temp_project / "nope.js")

    assert excinfo.value.origin == str(temp_project / "nope.js")


def test_load_sources_splits_loaded_and_skipped(write_source, temp_project):
    a = write_source("a.js", "@package x\nclass A { }\n")
    b = write_source("b.js", b"\xc3\x28")

    result = load_sources([a, b, temp_project / "c.js"])

    assert [s.origin for s in result.loaded] == [str(a)]
    assert [s.origin for s in result.skipped] == [str(b), str(temp_project / "c.js")]
    assert not result.ok
    diags = result.diagnostics()
    assert len(diags) == 2
    assert all(d.kind == "warning" and "[SRC-0010]" in d.message for d in diags)


def test_load_sources_empty_is_ok():
    result = load_sources([])

    assert result.ok
    assert result.loaded == []
