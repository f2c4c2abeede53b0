from datetime import datetime

import pytest

from outbound_board.core.exceptions import ValidationError
from outbound_board.transitions.clear import Clear
from outbound_board.transitions.factory import TransitionFactory
from outbound_board.transitions.set_in import SetIn
from outbound_board.transitions.set_out import SetOut
from outbound_board.transitions.set_return import SetReturn


def test_factory_maps_commands():
    factory = TransitionFactory()

    out = factory.for_command("OUT", place="Client HQ")
    assert isinstance(out, SetOut)
    assert out.place == "Client HQ"
    assert isinstance(factory.for_command("return"), SetReturn)
    assert isinstance(factory.for_command("in"), SetIn)
    assert isinstance(factory.for_command("clear"), Clear)


def test_factory_rejects_unknown_command():
    with pytest.raises(ValidationError):
        TransitionFactory().for_command("teleport")


def test_set_out_rejects_expected_return_in_the_past():
    now = datetime(2026, 2, 2, 10, 0)
    with pytest.raises(ValidationError):
        SetOut(place="A", expected_return_at=datetime(2026, 2, 2, 9, 0)).apply(None, "Kim", now)


def test_set_in_clears_expected_return():
    now = datetime(2026, 2, 2, 10, 0)
    out = SetOut(place="A", expected_return_at=datetime(2026, 2, 2, 12, 0)).apply(None, "Kim", now)

    rec = SetIn().apply(out, "Kim", now)

    assert rec.expected_return_at is None
    assert rec.out_at == now
