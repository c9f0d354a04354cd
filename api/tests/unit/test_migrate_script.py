import pytest

from scripts.migrate import build_args


def test_default_targets():
    assert build_args("upgrade", []) == ["upgrade", "head"]
    assert build_args("downgrade", []) == ["downgrade", "-1"]
    assert build_args("upgrade", ["001"]) == ["upgrade", "001"]


def test_revision_requires_message():
    assert build_args("revision", ["add index"]) == ["revision", "-m", "add index", "--autogenerate"]
    with pytest.raises(ValueError):
        build_args("revision", [])


def test_unknown_command():
    with pytest.raises(ValueError):
        build_args("stamp", [])
