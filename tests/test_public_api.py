"""Tests that the public import surface stays stable."""

from __future__ import annotations

import pytest

import monocle
import monocle.graph
import monocle.schema


@pytest.mark.parametrize(
    "module",
    [
        pytest.param(monocle, id="monocle"),
        pytest.param(monocle.graph, id="monocle.graph"),
        pytest.param(monocle.schema, id="monocle.schema"),
    ],
)
def test_all_names_resolve(module: object) -> None:
    for name in module.__all__:  # type: ignore[attr-defined]
        assert hasattr(module, name), name


def test_version() -> None:
    assert monocle.__version__ == "0.1.0"


def test_errors_share_base() -> None:
    assert issubclass(monocle.DuplicateObjectIdError, monocle.MonocleError)
    assert issubclass(monocle.UnknownEdgeTypeError, monocle.FilterError)
    assert issubclass(monocle.UnknownObjectTypeError, monocle.MonocleError)
