from __future__ import annotations

import pytest

from ghrel.core.result import Err, Ok, Result, is_err, is_ok


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"{n} is odd")
    return Ok(n // 2)


def test_ok_and_err_narrowing() -> None:
    ok = _half(4)
    err = _half(3)

    assert is_ok(ok) and ok.value == 2
    assert is_err(err) and err.error == "3 is odd"


def test_unwrap_or() -> None:
    assert _half(8).unwrap_or(-1) == 4
    assert _half(7).unwrap_or(-1) == -1


def test_unwrap_on_err_raises() -> None:
    with pytest.raises(ValueError, match="called unwrap on Err"):
        Err("boom").unwrap()


def test_map_err_converts_only_errors() -> None:
    assert Err("x").map_err(str.upper) == Err("X")
    assert Ok(1).map_err(str.upper) == Ok(1)


def test_repr() -> None:
    assert repr(Ok(1)) == "Ok(1)"
    assert repr(Err("e")) == "Err('e')"
