"""
Unit tests for tunables.py and access.py.

Tests setting, reading, resetting and the privilege gates.
"""

import unittest
from ..access import MuckerLevel, can_read, can_write
from ..common import TuneException
from ..objects import MemoryObjectDatabase
from ..params import REGISTRY
from ..params.errors import TuneSetResult
from ..params.registry import ParamRegistry
from ..params.schema import ParamDef, ParamType, ObjectType, IntegerValue, StringValue
from ..tunables import Tunables


WIZ = MuckerLevel.WIZARD
GOD = MuckerLevel.GOD


class TestAccess(unittest.TestCase):
    """Tests for can_read()/can_write()."""

    def test_levels(self):
        param = REGISTRY.lookup("file_motd")
        self.assertFalse(can_read(param, WIZ))
        self.assertTrue(can_read(param, GOD))
        self.assertFalse(can_write(param, WIZ))
        self.assertTrue(can_write(param, GOD))

    def test_monotonic(self):
        """Anything readable at a level stays readable at every higher one."""
        for param in REGISTRY:
            for level in range(MuckerLevel.NONE, MuckerLevel.GOD):
                if can_read(param, level):
                    self.assertTrue(can_read(param, level + 1), param.name)
                if can_write(param, level):
                    self.assertTrue(can_write(param, level + 1), param.name)


class TestTunables(unittest.TestCase):
    """Tests for the Tunables value store."""

    def setUp(self):
        self.tunables = Tunables(objects=MemoryObjectDatabase({
            0: ObjectType.ROOM,
            3: ObjectType.ROOM,
            7: ObjectType.THING,
        }))

    def test_starts_at_defaults(self):
        for param, value, is_default in self.tunables.items():
            self.assertEqual(value, param.default, param.name)
            self.assertTrue(is_default, param.name)

    def test_count_matches_registry(self):
        self.assertEqual(self.tunables.count_parms(), REGISTRY.count())
        self.assertEqual(len(self.tunables), REGISTRY.count())

    def test_set_and_get(self):
        result = self.tunables.set_parameter("max_output", "4096", WIZ)

        self.assertEqual(result, TuneSetResult.SUCCESS)
        self.assertEqual(self.tunables.get_parameter_string("max_output", WIZ), "4096")
        self.assertEqual(self.tunables["max_output"], 4096)
        self.assertFalse(self.tunables.is_default("max_output"))

    def test_set_is_case_insensitive(self):
        self.assertEqual(self.tunables.set_parameter("MAX_Output", "10", WIZ), TuneSetResult.SUCCESS)
        self.assertEqual(self.tunables["max_output"], 10)

    def test_boolean_canonical(self):
        self.tunables.set_parameter("idleboot", "NO", WIZ)
        self.assertEqual(self.tunables.get_parameter_string("idleboot", WIZ), "no")
        self.assertIs(self.tunables["idleboot"], False)

    def test_setting_default_value_is_not_default(self):
        """Only a reset restores the default flag."""
        default = self.tunables.get_parameter_string("max_output", WIZ)
        self.tunables.set_parameter("max_output", default, WIZ)
        self.assertFalse(self.tunables.is_default("max_output"))

    def test_bad_value_keeps_old(self):
        self.tunables.set_parameter("max_output", "2048", WIZ)

        self.assertEqual(self.tunables.set_parameter("max_output", "-1", WIZ), TuneSetResult.BADVAL)
        self.assertEqual(self.tunables["max_output"], 2048)

    def test_bad_syntax_keeps_old(self):
        self.assertEqual(self.tunables.set_parameter("idleboot", "perhaps", WIZ), TuneSetResult.SYNTAX)
        self.assertTrue(self.tunables.is_default("idleboot"))

    def test_unknown(self):
        count = self.tunables.count_parms()

        self.assertEqual(self.tunables.set_parameter("no_such_parm", "1", GOD), TuneSetResult.UNKNOWN)
        self.assertEqual(self.tunables.count_parms(), count)
        self.assertEqual(self.tunables.get_parameter_string("no_such_parm", GOD), "")
        self.assertNotIn("no_such_parm", self.tunables)

    def test_unknown_accessor_suggests(self):
        with self.assertRaises(KeyError) as ctx:
            self.tunables.get_value("max_outptu")
        self.assertIn("max_output", str(ctx.exception))

    def test_denied_write(self):
        before = self.tunables.get_parameter_string("file_motd", GOD)

        self.assertEqual(self.tunables.set_parameter("file_motd", "x.txt", WIZ), TuneSetResult.DENIED)
        self.assertEqual(self.tunables.get_parameter_string("file_motd", GOD), before)

    def test_denied_reset(self):
        self.tunables.set_parameter("file_motd", "x.txt", GOD)
        self.assertEqual(self.tunables.set_parameter("%file_motd", "", WIZ), TuneSetResult.DENIED)
        self.assertFalse(self.tunables.is_default("file_motd"))

    def test_denied_read_is_empty(self):
        self.assertEqual(self.tunables.get_parameter_string("file_motd", WIZ), "")
        self.assertEqual(self.tunables.get_parameter_string("file_motd", GOD), "data/motd.txt")

    def test_reset_with_percent_value(self):
        self.tunables.set_parameter("max_output", "10", WIZ)

        self.assertEqual(self.tunables.set_parameter("max_output", "%", WIZ), TuneSetResult.SUCCESS_DEFAULT)
        self.assertTrue(self.tunables.is_default("max_output"))
        self.assertEqual(self.tunables.get_parameter_string("max_output", WIZ), "1024")

    def test_reset_with_percent_name(self):
        """A flagged name resets, whatever value comes with it."""
        self.tunables.set_parameter("max_output", "10", WIZ)

        self.assertEqual(self.tunables.set_parameter("%max_output", "77", WIZ), TuneSetResult.SUCCESS_DEFAULT)
        self.assertEqual(self.tunables["max_output"], 1024)
        self.assertTrue(self.tunables.is_default("max_output"))

    def test_padded_percent_is_a_value(self):
        """Only a value of exactly '%' asks for a reset."""
        self.assertEqual(self.tunables.set_parameter("muckname", " % ", WIZ), TuneSetResult.SUCCESS)
        self.assertEqual(self.tunables["muckname"], " % ")
        self.assertFalse(self.tunables.is_default("muckname"))

    def test_overlong_number(self):
        self.assertEqual(self.tunables.set_parameter("max_output", "9" * 5000, GOD), TuneSetResult.BADVAL)
        self.assertEqual(self.tunables["max_output"], 1024)

    def test_get_ignores_flag(self):
        self.assertEqual(self.tunables.get_parameter_string("%max_output", WIZ), "1024")

    def test_dbref(self):
        self.assertEqual(self.tunables.set_parameter("player_start", "#3", WIZ), TuneSetResult.SUCCESS)
        self.assertEqual(self.tunables.get_parameter_string("player_start", WIZ), "#3")
        self.assertEqual(self.tunables.set_parameter("player_start", "#7", WIZ), TuneSetResult.BADVAL)
        self.assertEqual(self.tunables.set_parameter("player_start", "#99", WIZ), TuneSetResult.BADVAL)
        self.assertEqual(self.tunables["player_start"], 3)

    def test_nullable_string(self):
        self.tunables.set_parameter("smtp_user", "mailer", GOD)
        self.tunables.set_parameter("smtp_user", "", GOD)

        self.assertIsNone(self.tunables["smtp_user"])
        self.assertEqual(self.tunables.get_parameter_string("smtp_user", GOD), "")
        self.assertFalse(self.tunables.is_default("smtp_user"))

    def test_timespan(self):
        self.tunables.set_parameter("dump_interval", "2h", WIZ)
        self.assertEqual(self.tunables["dump_interval"], 7200)
        self.assertEqual(self.tunables.get_parameter_string("dump_interval", WIZ), "7200")

    def test_load_defaults(self):
        self.tunables.set_parameter("max_output", "10", WIZ)
        self.tunables.set_parameter("muckname", "Elsewhere", WIZ)
        self.tunables.load_defaults()

        self.assertEqual(self.tunables["max_output"], 1024)
        self.assertEqual(self.tunables["muckname"], "TygryssMUCK")
        self.assertTrue(self.tunables.is_default("muckname"))

    def test_free_parms(self):
        self.tunables.set_parameter("max_output", "10", WIZ)
        self.tunables.set_parameter("muckname", "Elsewhere", WIZ)

        self.assertEqual(self.tunables.free_parms(), 2)
        self.assertEqual(self.tunables.free_parms(), 0)
        self.assertEqual(self.tunables["muckname"], "TygryssMUCK")

    def test_independent_instances(self):
        other = Tunables()
        self.tunables.set_parameter("max_output", "10", WIZ)
        self.assertEqual(other["max_output"], 1024)

    def test_inactive_modules(self):
        tunables = Tunables(inactive_modules=["SSL"])
        self.assertFalse(tunables.is_active(REGISTRY.lookup("ssl_cert_file")))
        self.assertTrue(tunables.is_active(REGISTRY.lookup("muckname")))


class TestCustomRegistry(unittest.TestCase):
    """Tunables over a registry other than the built-in one."""

    def setUp(self):
        reg = ParamRegistry()
        reg.register(ParamDef(name="limit", param_type=ParamType.INTEGER, default=IntegerValue(5),
                              read_level=0, write_level=MuckerLevel.MASTER))
        reg.register(ParamDef(name="motd", param_type=ParamType.STRING, default=StringValue("hi")))
        reg.freeze()
        self.tunables = Tunables(registry=reg)

    def test_count(self):
        self.assertEqual(self.tunables.count_parms(), 2)

    def test_gate(self):
        self.assertEqual(self.tunables.set_parameter("limit", "6", MuckerLevel.JOURNEYMAN), TuneSetResult.DENIED)
        self.assertEqual(self.tunables.set_parameter("limit", "6", MuckerLevel.MASTER), TuneSetResult.SUCCESS)
        self.assertEqual(self.tunables.get_parameter_string("limit", MuckerLevel.NONE), "6")

    def test_builtin_names_unknown(self):
        self.assertEqual(self.tunables.set_parameter("max_output", "1", GOD), TuneSetResult.UNKNOWN)

    def test_suggestions_come_from_own_registry(self):
        with self.assertRaises(KeyError) as ctx:
            self.tunables.get_value("limt")

        self.assertIn("'limit'", str(ctx.exception))

        with self.assertRaises(KeyError) as ctx:
            self.tunables.get_value("max_outptu")

        self.assertNotIn("max_output", str(ctx.exception))

    def test_install_rejects_wrong_type(self):
        # pylint: disable=protected-access
        with self.assertRaises(TuneException):
            self.tunables._install(self.tunables.lookup("limit"), StringValue("6"), False)


if __name__ == "__main__":
    unittest.main()
