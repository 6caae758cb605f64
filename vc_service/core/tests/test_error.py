from unittest import TestCase

from ..error import BaseError


class TestBaseError(TestCase):
    def test_message(self):
        err = BaseError(" could not create credential ")
        assert err.message == "could not create credential"
        assert BaseError().message == ""

    def test_error_code(self):
        assert BaseError("x").error_code is None
        assert BaseError("x", error_code="bad").error_code == "bad"

    def test_roll_up(self):
        try:
            try:
                raise KeyError("record missing")
            except KeyError as err:
                raise BaseError("could not get credential\nwith id: 1") from err
        except BaseError as err:
            rolled = err.roll_up

        assert "\n" not in rolled
        assert rolled == "could not get credential. with id: 1: record missing"

    def test_roll_up_no_args(self):
        assert BaseError().roll_up == "BaseError"
