"""
Unit tests for params/codec.py module.
"""

import unittest
from ..objects import MemoryObjectDatabase
from ..params import REGISTRY
from ..params.codec import (
    parse_value, format_value, parse_timespan,
    TuneSyntaxError, TuneBadValueError,
)
from ..params.schema import (
    ParamDef, ParamType, ObjectType,
    BooleanValue, IntegerValue, TimespanValue, DbrefValue, StringValue,
)


def _objects():
    return MemoryObjectDatabase({
        0: ObjectType.ROOM,
        1: ObjectType.PLAYER,
        5: ObjectType.THING,
        9: ObjectType.GARBAGE,
    })


class TestBoolean(unittest.TestCase):
    param = REGISTRY.lookup("idleboot")

    def test_true_spellings(self):
        for text in ["yes", "YES", "y", "true", "On", "1", " yes "]:
            self.assertEqual(parse_value(self.param, text), BooleanValue(True), text)

    def test_false_spellings(self):
        for text in ["no", "N", "false", "off", "0"]:
            self.assertEqual(parse_value(self.param, text), BooleanValue(False), text)

    def test_bad_syntax(self):
        with self.assertRaises(TuneSyntaxError):
            parse_value(self.param, "maybe")

    def test_canonical_text(self):
        self.assertEqual(format_value(self.param, parse_value(self.param, "YES")), "yes")
        self.assertEqual(format_value(self.param, BooleanValue(False)), "no")


class TestInteger(unittest.TestCase):
    param = REGISTRY.lookup("max_output")

    def test_parse(self):
        self.assertEqual(parse_value(self.param, "4096"), IntegerValue(4096))
        self.assertEqual(parse_value(self.param, " +12 "), IntegerValue(12))

    def test_not_a_number(self):
        for text in ["", "12abc", "1.5", "lots"]:
            with self.assertRaises(TuneSyntaxError, msg=text):
                parse_value(self.param, text)

    def test_below_minimum(self):
        with self.assertRaises(TuneBadValueError):
            parse_value(self.param, "-1")

    def test_above_maximum(self):
        with self.assertRaises(TuneBadValueError):
            parse_value(REGISTRY.lookup("max_loaded_objs"), "101")

    def test_out_of_range(self):
        with self.assertRaises(TuneBadValueError):
            parse_value(self.param, str(2 ** 31))

    def test_overlong_digits(self):
        """Thousands of digits are an out-of-range value, not a crash."""
        for text in ["9" * 5000, "-" + "9" * 5000]:
            with self.assertRaises(TuneBadValueError):
                parse_value(self.param, text)

    def test_leading_zeros(self):
        self.assertEqual(parse_value(self.param, "0" * 40 + "12"), IntegerValue(12))

    def test_unconstrained_negative(self):
        param = ParamDef(name="offset", param_type=ParamType.INTEGER, default=IntegerValue(0))
        self.assertEqual(parse_value(param, "-40"), IntegerValue(-40))

    def test_format(self):
        self.assertEqual(format_value(self.param, IntegerValue(-3)), "-3")


class TestTimespan(unittest.TestCase):
    param = REGISTRY.lookup("dump_interval")

    def test_parse_timespan_forms(self):
        self.assertEqual(parse_timespan("90"), 90)
        self.assertEqual(parse_timespan("90s"), 90)
        self.assertEqual(parse_timespan("15m"), 900)
        self.assertEqual(parse_timespan("2H"), 7200)
        self.assertEqual(parse_timespan("1d"), 86400)
        self.assertEqual(parse_timespan("1d 02:30:05"), 86400 + 2 * 3600 + 30 * 60 + 5)
        self.assertIsNone(parse_timespan("soon"))

    def test_parse(self):
        self.assertEqual(parse_value(self.param, "2h"), TimespanValue(7200))

    def test_negative(self):
        with self.assertRaises(TuneBadValueError):
            parse_value(self.param, "-5")

    def test_bad_syntax(self):
        with self.assertRaises(TuneSyntaxError):
            parse_value(self.param, "2 weeks")

    def test_overlong_digits(self):
        for text in ["1" * 5000, "1" * 5000 + "h", "1" * 5000 + "d 01:00:00"]:
            with self.assertRaises(TuneBadValueError, msg=text[-10:]):
                parse_value(self.param, text)

    def test_format_is_seconds(self):
        self.assertEqual(format_value(self.param, parse_value(self.param, "1m")), "60")


class TestDbref(unittest.TestCase):
    room_param = REGISTRY.lookup("player_start")
    player_param = REGISTRY.lookup("toad_default_recipient")

    def test_parse(self):
        self.assertEqual(parse_value(self.room_param, "#0", _objects()), DbrefValue(0))
        self.assertEqual(parse_value(self.player_param, "#1", _objects()), DbrefValue(1))

    def test_missing_hash(self):
        with self.assertRaises(TuneSyntaxError):
            parse_value(self.room_param, "0", _objects())

    def test_missing_object(self):
        with self.assertRaises(TuneBadValueError):
            parse_value(self.room_param, "#42", _objects())

    def test_negative_ref(self):
        with self.assertRaises(TuneBadValueError):
            parse_value(self.room_param, "#-1", _objects())

    def test_overlong_ref(self):
        with self.assertRaises(TuneBadValueError):
            parse_value(self.room_param, "#" + "1" * 5000, _objects())

    def test_no_database(self):
        with self.assertRaises(TuneBadValueError):
            parse_value(self.room_param, "#0")

    def test_garbage(self):
        param = REGISTRY.lookup("welcome_mpi_what")
        with self.assertRaises(TuneBadValueError):
            parse_value(param, "#9", _objects())

    def test_wrong_kind(self):
        with self.assertRaises(TuneBadValueError) as ctx:
            parse_value(self.room_param, "#5", _objects())
        self.assertIn("thing", str(ctx.exception))

    def test_any_kind(self):
        param = REGISTRY.lookup("welcome_mpi_what")
        self.assertEqual(parse_value(param, "#5", _objects()), DbrefValue(5))

    def test_format(self):
        self.assertEqual(format_value(self.room_param, DbrefValue(0)), "#0")
        self.assertEqual(format_value(self.room_param, DbrefValue(-1)), "#-1")


class TestString(unittest.TestCase):
    param = REGISTRY.lookup("muckname")

    def test_verbatim(self):
        self.assertEqual(parse_value(self.param, "  Spaced Out  "), StringValue("  Spaced Out  "))

    def test_empty_not_nullable(self):
        self.assertEqual(parse_value(self.param, ""), StringValue(""))

    def test_empty_nullable(self):
        param = REGISTRY.lookup("smtp_user")
        self.assertTrue(param.nullable)
        self.assertEqual(parse_value(param, ""), StringValue(None))
        self.assertEqual(format_value(param, StringValue(None)), "")

    def test_line_breaks_rejected(self):
        with self.assertRaises(TuneBadValueError):
            parse_value(self.param, "two\nlines")

    def test_none_text(self):
        with self.assertRaises(TuneSyntaxError):
            parse_value(self.param, None)


if __name__ == "__main__":
    unittest.main()
