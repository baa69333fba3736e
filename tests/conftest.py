import itertools
from pathlib import Path
from typing import Callable, Iterable

import pytest

from flashquiz.card_store import CardStore
from flashquiz.models import Card


# each test runs on cwd to its temp dir
@pytest.fixture(autouse=True)
def go_to_tmpdir(request):
    """
    Temporarily change the process working directory to the test's tmpdir.

    Relative file names typed into a session then land inside the test's
    temporary directory.
    """
    tmpdir = request.getfixturevalue("tmpdir")
    with tmpdir.as_cwd():
        yield


@pytest.fixture
def empty_store() -> CardStore:
    return CardStore()


@pytest.fixture
def two_card_store() -> CardStore:
    """
    A store holding ("x", "1") and ("y", "2"), both without mistakes.
    """
    store = CardStore()
    store.add("x", "1")
    store.add("y", "2")
    return store


@pytest.fixture
def capital_store() -> CardStore:
    """
    A store holding ("capital", "Paris", 0) and ("author", "Twain", 2).
    """
    store = CardStore()
    store.merge(Card(term="capital", definition="Paris", mistakes=0))
    store.merge(Card(term="author", definition="Twain", mistakes=2))
    return store


@pytest.fixture
def card_file(tmp_path: Path) -> Callable[..., Path]:
    """
    Return a factory that writes the given lines to a card file in tmp_path.
    """

    def _write(lines: Iterable[str], name: str = "cards.txt") -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_picker() -> Callable[..., Callable[[int], int]]:
    """
    Return a factory for deterministic index pickers.

    The picker yields the given indices in order and then keeps repeating the
    last one.
    """

    def _make(*indices: int) -> Callable[[int], int]:
        source = itertools.chain(indices, itertools.repeat(indices[-1]))
        return lambda size: next(source)

    return _make
