"""
Tunable Parameter Definitions.

Single file containing every tunable parameter the server exposes through
@tune. Importing this module registers them with REGISTRY in display order
and freezes it.
"""

from typing import Dict, Any
from .schema import ParamDef, ParamType, ObjectType, MuckerLevel
from .registry import REGISTRY

GOD = MuckerLevel.GOD
WIZ = MuckerLevel.WIZARD

GOD_REF = 1  # the player who owns the database


# ============================================================================
# Schema Validation for Constraints
# ============================================================================

_VALID_CONSTRAINT_KEYS = {"min", "max"}


def _validate_constraint(param_name: str, constraint: Dict[str, Any]) -> None:
    """Validate a constraint dict has valid keys with 'did you mean?' suggestions."""
    # Import here to avoid circular import at module load time
    from .suggest import suggest_similar, format_suggestion  # pylint: disable=import-outside-toplevel

    invalid_keys = set(constraint.keys()) - _VALID_CONSTRAINT_KEYS
    if invalid_keys:
        first_invalid = next(iter(invalid_keys))
        msg = (f"Invalid constraint key '{first_invalid}' for '{param_name}'. "
               f"Valid keys are: {sorted(_VALID_CONSTRAINT_KEYS)}")
        suggestion = format_suggestion(suggest_similar(first_invalid, _VALID_CONSTRAINT_KEYS))
        if suggestion:
            msg = f"{msg}. {suggestion}"
        raise ValueError(msg)

    for key in ("min", "max"):
        if key in constraint and not isinstance(constraint[key], int):
            raise ValueError(f"Constraint '{key}' for '{param_name}' must be an integer")


def _validate_all_constraints(constraints: Dict[str, Dict]) -> None:
    """Validate all constraint definitions."""
    for param_name, constraint in constraints.items():
        _validate_constraint(param_name, constraint)


# Range constraints for numeric parameters
CONSTRAINTS = {
    # Costs and currency
    "exit_cost": {"min": 0},
    "link_cost": {"min": 0},
    "lookup_cost": {"min": 0},
    "object_cost": {"min": 0},
    "room_cost": {"min": 0},
    "max_object_endowment": {"min": 0},
    "max_pennies": {"min": 0},
    "penny_rate": {"min": 0},
    "start_pennies": {"min": 0},

    # Limits
    "max_output": {"min": 0},
    "max_force_level": {"min": 0},
    "max_instr_count": {"min": 0},
    "max_interp_recursion": {"min": 0},
    "max_loaded_objs": {"min": 0, "max": 100},
    "max_ml4_nested_interp_loop_count": {"min": 0},
    "max_ml4_preempt_count": {"min": 0},
    "max_nested_interp_loop_count": {"min": 0},
    "max_plyr_processes": {"min": 0},
    "max_process_limit": {"min": 0},
    "max_propfetch": {"min": 0},
    "mpi_max_commands": {"min": 0},
    "instr_slice": {"min": 1},
    "free_frames_pool": {"min": 0},
    "player_name_limit": {"min": 1},
    "playermax_limit": {"min": 0},
    "pname_history_threshold": {"min": 0},
    "process_timer_limit": {"min": 0},

    # Spam limits
    "command_burst_size": {"min": 0},
    "command_time_msec": {"min": 0},
    "commands_per_time": {"min": 0},
    "cmd_log_threshold_msec": {"min": 0},

    # Mucker levels
    "addpennies_muf_mlev": {"min": 0, "max": GOD},
    "mcp_muf_mlev": {"min": 0, "max": GOD},
    "movepennies_muf_mlev": {"min": 0, "max": GOD},
    "pennies_muf_mlev": {"min": 0, "max": GOD},
    "listen_mlev": {"min": 0, "max": GOD},
    "userlog_mlev": {"min": 0, "max": GOD},

    # SMTP
    "smtp_ssl_type": {"min": 0, "max": 2},
    "smtp_auth_type": {"min": 0, "max": 2},

    "dump_warntime": {"min": 0},
    "pause_min": {"min": 0},
}


def _r(name, ptype, default, group, label, **kwargs):
    """Register a parameter. kwargs are passed through to ParamDef."""
    REGISTRY.register(ParamDef(
        name=name,
        param_type=ptype,
        default=ptype.value_class(default),
        group=group,
        label=label,
        constraints=CONSTRAINTS.get(name),
        **kwargs,
    ))


def _load():  # pylint: disable=too-many-statements
    """Load all parameter definitions."""
    BOOL, INT, TIME = ParamType.BOOLEAN, ParamType.INTEGER, ParamType.TIMESPAN
    REF, STR = ParamType.DBREF, ParamType.STRING

    # --- Charset ---
    _r("7bit_other_names", BOOL, True, "Charset", "Limit exit/room/muf names to 7-bit characters")
    _r("7bit_thing_names", BOOL, True, "Charset", "Limit thing names to 7-bit characters")
    _r("tab_input_replaced_with_space", BOOL, True, "Charset", "Replace tabs in input with spaces")

    # --- Commands ---
    _r("autolook_cmd", STR, "look", "Commands", "Room entry look command")
    _r("cmd_only_overrides", BOOL, False, "Commands", "Only allow overrides on command-only actions")
    _r("enable_home", BOOL, True, "Commands", "Enable 'home' command")
    _r("enable_prefix", BOOL, False, "Commands", "Enable prefix actions")
    _r("m3_huh", BOOL, False, "Commands", "Enable huh? to call an exit named \"huh?\" and set M3, with full command string")
    _r("recognize_null_command", BOOL, False, "Commands", "Recognize null command")
    _r("verbose_clone", BOOL, False, "Commands", "Expanded verbose output when cloning objects")

    # --- Currency ---
    _r("cpennies", STR, "Pennies", "Currency", "Currency name, capitalized, plural")
    _r("cpenny", STR, "Penny", "Currency", "Currency name, capitalized")
    _r("pennies", STR, "pennies", "Currency", "Currency name, plural")
    _r("penny", STR, "penny", "Currency", "Currency name")
    _r("max_pennies", INT, 10000, "Currency", "Player currency cap")
    _r("penny_rate", INT, 8, "Currency", "Moves between finding currency, avg")
    _r("start_pennies", INT, 10, "Currency", "Player starting currency count")
    _r("addpennies_muf_mlev", INT, 2, "Currency", "Mucker level required to create/destroy pennies")
    _r("movepennies_muf_mlev", INT, 2, "Currency", "Mucker level required to move pennies non-destructively")
    _r("pennies_muf_mlev", INT, 1, "Currency", "Mucker level required to read the value of pennies, settings above 1 disable {money}")

    # --- Database ---
    _r("diskbase_propvals", BOOL, True, "Database", "Enable property value diskbasing (req. restart)")
    _r("default_room_parent", REF, 0, "Database", "Place to parent new rooms to",
       object_type=ObjectType.ROOM)
    _r("lost_and_found", REF, 0, "Database", "Place for things without a home",
       object_type=ObjectType.ROOM)
    _r("player_start", REF, 0, "Database", "Place where new players start",
       object_type=ObjectType.ROOM)
    _r("toad_default_recipient", REF, GOD_REF, "Database", "Default owner for @toaded player's things",
       object_type=ObjectType.PLAYER)
    _r("toad_recycle", BOOL, False, "Database", "Recycle @toaded player's things by default")
    _r("aging_time", TIME, 7776000, "Database", "When to considered an object old and unused")
    _r("clean_interval", TIME, 900, "Database", "Interval between unused object purges")
    _r("periodic_program_purge", BOOL, True, "Database", "Periodically free unused MUF programs")
    _r("max_loaded_objs", INT, 5, "Database", "Max proploaded objects in memory in percent")
    _r("max_propfetch", INT, 1000, "Database", "Max property fetches between saves")

    # --- DB Dumps ---
    _r("dbdump_warning", BOOL, False, "DB Dumps", "Enable warning messages for full DB dumps")
    _r("dumpdone_warning", BOOL, False, "DB Dumps", "Enable notification of DB dump completion")
    _r("dump_interval", TIME, 14400, "DB Dumps", "Interval between dumps")
    _r("dump_warntime", TIME, 120, "DB Dumps", "Interval between warning and dump")
    _r("dumpdone_mesg", STR, "## Save complete. ##", "DB Dumps", "Database dump finished message")
    _r("dumping_mesg", STR, "## Pausing to save database. This may take a while. ##", "DB Dumps",
       "Database dump started message")
    _r("dumpwarn_mesg", STR, "## Game will pause to save the database in a few minutes. ##", "DB Dumps",
       "Database dump warning message")

    # --- Files (readable only by GOD, as they reveal the server layout) ---
    for name, default, label in [
        ("file_connection_help", "data/connect-help.txt", "'help' before login"),
        ("file_credits", "data/credits.txt", "Acknowledgements"),
        ("file_editor_help", "data/edit-help.txt", "Editor help"),
        ("file_help", "data/help.txt", "Main help"),
        ("file_help_dir", "data/help", "Main help directory"),
        ("file_info_dir", "data/info/", "Info directory"),
        ("file_man", "data/man.txt", "Main MUF help"),
        ("file_man_dir", "data/man", "Main MUF help directory"),
        ("file_motd", "data/motd.txt", "Message of the day"),
        ("file_mpihelp", "data/mpihelp.txt", "Main MPI help"),
        ("file_mpihelp_dir", "data/mpihelp", "Main MPI help directory"),
        ("file_news", "data/news.txt", "Main news"),
        ("file_news_dir", "data/news", "Main news directory"),
        ("file_welcome_screen", "data/welcome.txt", "Welcome screen"),
    ]:
        _r(name, STR, default, "Files", label, read_level=GOD, write_level=GOD)

    # --- Idle Boot ---
    _r("idleboot", BOOL, True, "Idle Boot", "Enable booting of idle players")
    _r("idle_boot_mesg", STR, "Autodisconnecting for inactivity.", "Idle Boot", "Boot message for idling out")
    _r("idle_ping_enable", BOOL, True, "Idle Boot", "Enable keepalive pings")
    _r("idle_ping_time", TIME, 55, "Idle Boot", "Time between keepalive pings")
    _r("maxidle", TIME, 7200, "Idle Boot", "Maximum idle time before booting")

    # --- Listeners ---
    _r("allow_listeners", BOOL, True, "Listeners", "Enable programs to listen to player output")
    _r("allow_listeners_env", BOOL, True, "Listeners", "Allow listeners down environment")
    _r("allow_listeners_obj", BOOL, True, "Listeners", "Allow objects to be listeners")
    _r("listen_mlev", INT, 3, "Listeners", "Mucker Level required for Listener programs")

    # --- Logging ---
    _r("cmd_log_threshold_msec", INT, 1000, "Logging", "Log commands that take longer than X millisecs")
    _r("log_commands", BOOL, True, "Logging", "Enable logging of player commands")
    _r("log_failed_commands", BOOL, False, "Logging", "Enable logging of unrecognized commands")
    _r("log_interactive", BOOL, True, "Logging", "Enable logging of text sent to MUF")
    _r("log_programs", BOOL, True, "Logging", "Log programs every time they are saved")
    for name, default, label in [
        ("file_log_cmd_times", "logs/cmd-times", "Command times"),
        ("file_log_commands", "logs/commands", "Player commands"),
        ("file_log_gripes", "logs/gripes", "Player gripes"),
        ("file_log_malloc", "logs/malloc", "Memory allocations"),
        ("file_log_muf_errors", "logs/muf-errors", "MUF compile errors and warnings"),
        ("file_log_programs", "logs/programs", "Text of changed programs"),
        ("file_log_sanfix", "logs/sanfixed", "Database fixes"),
        ("file_log_sanity", "logs/sanity", "Database corruption and errors"),
        ("file_log_status", "logs/status", "System events"),
        ("file_log_stderr", "logs/fbmuck.err", "Server error redirect"),
        ("file_log_stdout", "logs/fbmuck.out", "Server output redirect"),
        ("file_log_user", "logs/user", "MUF-writable messages"),
    ]:
        _r(name, STR, default, "Logging", label, read_level=GOD, write_level=GOD)
    _r("userlog_mlev", INT, 3, "Logging", "Mucker Level required to write to userlog")

    # --- Costs ---
    _r("exit_cost", INT, 1, "Costs", "Cost to create an exit")
    _r("link_cost", INT, 1, "Costs", "Cost to link an exit")
    _r("lookup_cost", INT, 0, "Costs", "Cost to lookup a player name")
    _r("max_object_endowment", INT, 100, "Costs", "Max value of an object")
    _r("object_cost", INT, 10, "Costs", "Cost to create an object")
    _r("room_cost", INT, 10, "Costs", "Cost to create a room")

    # --- Messages ---
    _r("connect_fail_mesg", STR, "Either that player does not exist, or has a different password.",
       "Messages", "Failed player connect message")
    _r("create_fail_mesg", STR, "Either there is already a player with that name, or that name is illegal.",
       "Messages", "Failed player create message")
    _r("description_default", STR, "You see nothing special.", "Messages", "Default description")
    _r("huh_mesg", STR, "Huh?  (Type \"help\" for help.)", "Messages", "Unrecognized command warning")
    _r("leave_mesg", STR, "Come back later!", "Messages", "Logoff message")
    _r("muckname", STR, "TygryssMUCK", "Messages", "Name of the MUCK")
    _r("register_mesg", STR, "Sorry, you can get a character by e-mailing XXXX@machine.net.address with a charname and password.",
       "Messages", "Login registration denied message")

    # --- Movement ---
    _r("dark_sleepers", BOOL, False, "Movement", "Make sleeping players dark")
    _r("exit_darking", BOOL, True, "Movement", "Allow players to set exits dark")
    _r("quiet_moves", BOOL, False, "Movement", "Disable arrive/depart messages")
    _r("secure_teleport", BOOL, False, "Movement", "Restrict actions to Jump_OK or controlled rooms")
    _r("secure_thing_movement", BOOL, False, "Movement", "Moving things act like player")
    _r("teleport_to_player", BOOL, True, "Movement", "Allow using exits linked to players")
    _r("thing_darking", BOOL, True, "Movement", "Allow players to set things dark")
    _r("wiz_vehicles", BOOL, False, "Movement", "Only let Wizards set vehicle bits")

    # --- MPI ---
    _r("do_mpi_parsing", BOOL, True, "MPI", "Parse MPI strings in messages")
    _r("mpi_continue_after_logout", BOOL, True, "MPI", "MPI programs continue after logout")
    _r("mpi_max_commands", INT, 2048, "MPI", "Max MPI instruction run length")
    _r("do_welcome_parsing", BOOL, True, "MPI", "Parse MPI in welcome screen")
    _r("welcome_mpi_what", REF, -1, "MPI", "Trigger object for welcome MPI")
    _r("welcome_mpi_who", REF, -1, "MPI", "Permissions player for welcome MPI",
       object_type=ObjectType.PLAYER)

    # --- MUF ---
    _r("compatible_priorities", BOOL, True, "MUF", "Use legacy exit priority levels on things")
    _r("consistent_lock_source", BOOL, True, "MUF", "Maintain trigger as lock source in TESTLOCK")
    _r("expanded_debug_trace", BOOL, True, "MUF", "MUF debug trace shows array contents")
    _r("force_mlev1_name_notify", BOOL, True, "MUF", "MUF notify prepends username at ML1")
    _r("free_frames_pool", INT, 8, "MUF", "Size of allocated MUF process frame pool")
    _r("ieee_bounds_handling", BOOL, False, "MUF", "Return inf/nan for floating point domain errors")
    _r("instr_slice", INT, 2000, "MUF", "Max uninterrupted instructions per timeslice")
    _r("max_force_level", INT, 1, "MUF", "Maximum number of forces processed within a command")
    _r("max_instr_count", INT, 20000, "MUF", "Max MUF instruction run length for ML1")
    _r("max_interp_recursion", INT, 16, "MUF", "Max interp recursion")
    _r("max_ml4_nested_interp_loop_count", INT, 0, "MUF",
       "Max ML4 nested interpreter loop count (0 = unlimited)")
    _r("max_ml4_preempt_count", INT, 0, "MUF", "Max ML4 instruction run length (0 = unlimited)")
    _r("max_nested_interp_loop_count", INT, 16, "MUF", "Max nested interpreter loop count")
    _r("max_plyr_processes", INT, 32, "MUF", "Concurrent processes allowed per player")
    _r("max_process_limit", INT, 400, "MUF", "Total concurrent processes allowed on system")
    _r("mcp_muf_mlev", INT, 3, "MUF", "Mucker Level required to use MCP")
    _r("muf_comments_strict", BOOL, True, "MUF", "MUF comments are strict and not recursive")
    _r("new_program_flags", STR, "", "MUF", "Initial flags for newly created programs",
       nullable=True)
    _r("optimize_muf", BOOL, True, "MUF", "Enable MUF bytecode optimizer")
    _r("pause_min", INT, 0, "MUF", "Min ms to pause between MUF timeslices")
    _r("process_timer_limit", INT, 4, "MUF", "Max timers per process")

    # --- Player Max ---
    _r("playermax", BOOL, False, "Player Max", "Limit number of concurrent players allowed")
    _r("playermax_bootmesg", STR, "Sorry, but there are too many players online.  Please try reconnecting in a few minutes.",
       "Player Max", "Max. players connection error message")
    _r("playermax_limit", INT, 56, "Player Max", "Max. player connections allowed")
    _r("playermax_warnmesg", STR, "You likely won't be able to connect right now, since too many players are online.",
       "Player Max", "Max. players connection login warning")

    # --- Properties ---
    _r("gender_prop", STR, "sex", "Properties", "Property name used for pronoun substitutions")
    _r("lock_envcheck", BOOL, False, "Properties", "Locks check environment for properties")

    # --- Registration ---
    _r("pcreate_flags", STR, "B", "Registration", "Initial flags for newly created players")
    _r("registration", BOOL, True, "Registration", "Require new players to register manually")
    _r("reserved_names", STR, "", "Registration", "String match for reserved names",
       nullable=True)
    _r("reserved_player_names", STR, "", "Registration", "String match for reserved player names",
       nullable=True)
    _r("player_name_limit", INT, 16, "Registration", "Limit on player name length")
    _r("pname_history_reporting", BOOL, True, "Registration", "Report player name change history")
    _r("pname_history_threshold", TIME, 2592000, "Registration", "Length of player name change history")

    # --- Spam Limits ---
    _r("command_burst_size", INT, 500, "Spam Limits", "Commands before limiter engages")
    _r("command_time_msec", INT, 1000, "Spam Limits", "Millisecs per spam limiter time period")
    _r("commands_per_time", INT, 2, "Spam Limits", "Commands allowed per time period")
    _r("max_output", INT, 1024, "Spam Limits", "Max output buffer size")

    # --- Misc ---
    _r("allow_zombies", BOOL, True, "Misc", "Enable Zombie things to relay what they hear")
    _r("autolink_actions", BOOL, False, "Misc", "Automatically link @actions to NIL")
    _r("ignore_bidirectional", BOOL, True, "Misc", "Enable bidirectional ignore")
    _r("ignore_support", BOOL, True, "Misc", "Enable support for @ignoring players")
    _r("realms_control", BOOL, False, "Misc", "Enable Realms wizard controls")
    _r("secure_who", BOOL, False, "Misc", "Disallow WHO command from login screen and programs")
    _r("strict_god_priv", BOOL, True, "Misc", "Only God can touch God's objects")
    _r("use_hostnames", BOOL, True, "Misc", "Resolve IP addresses into hostnames")
    _r("who_hides_dark", BOOL, True, "Misc", "Hide dark players from WHO list")

    # --- SSL ---
    _r("server_cipher_preference", BOOL, True, "SSL", "Honor server cipher preference order over client's",
       module="ssl")
    _r("ssl_auto_reload_certs", BOOL, True, "SSL", "Automatically reload certs when they change",
       module="ssl")
    _r("ssl_cert_file", STR, "data/server.pem", "SSL", "Path to SSL certificate .pem",
       module="ssl", read_level=GOD, write_level=GOD)
    _r("ssl_cipher_preference_list", STR, "HIGH:!aNULL:!kRSA:!PSK:!SRP:!MD5:!RC4@STRENGTH", "SSL",
       "Allowed OpenSSL cipher list", module="ssl", read_level=GOD, write_level=GOD)
    _r("ssl_key_file", STR, "data/server.pem", "SSL", "Path to SSL private key .pem",
       module="ssl", read_level=GOD, write_level=GOD)
    _r("ssl_keyfile_passwd", STR, "", "SSL", "Password for SSL private key file",
       module="ssl", read_level=GOD, write_level=GOD, nullable=True)
    _r("ssl_min_protocol_version", STR, "None", "SSL", "Min. allowed SSL protocol version for clients",
       module="ssl", read_level=GOD, write_level=GOD)
    _r("starttls_allow", BOOL, False, "SSL", "Enable TELNET STARTTLS encryption on plaintext port",
       module="ssl")

    # --- SMTP ---
    _r("smtp_server", STR, "", "SMTP", "SMTP server hostname", module="smtp",
       read_level=WIZ, write_level=GOD, nullable=True)
    _r("smtp_port", STR, "25", "SMTP", "SMTP server port", module="smtp",
       read_level=WIZ, write_level=GOD)
    _r("smtp_ssl_type", INT, 0, "SMTP", "SMTP encryption (0 = none, 1 = SSL, 2 = STARTTLS)", module="smtp",
       read_level=WIZ, write_level=GOD)
    _r("smtp_no_verify_cert", BOOL, False, "SMTP", "Skip SMTP server certificate verification", module="smtp",
       read_level=WIZ, write_level=GOD)
    _r("smtp_auth_type", INT, 0, "SMTP", "SMTP authentication (0 = none, 1 = plain, 2 = login)", module="smtp",
       read_level=WIZ, write_level=GOD)
    _r("smtp_user", STR, "", "SMTP", "SMTP user name", module="smtp",
       read_level=GOD, write_level=GOD, nullable=True)
    _r("smtp_password", STR, "", "SMTP", "SMTP password", module="smtp",
       read_level=GOD, write_level=GOD, nullable=True)
    _r("smtp_from_name", STR, "", "SMTP", "Sender name on outgoing mail", module="smtp",
       read_level=WIZ, write_level=GOD, nullable=True)
    _r("smtp_from_email", STR, "", "SMTP", "Sender address on outgoing mail", module="smtp",
       read_level=WIZ, write_level=GOD, nullable=True)


# Load definitions when module imported and freeze registry
def _init_registry():
    """Initialize and freeze the registry. Called once at module import."""
    try:
        # Catches typos like "mni" instead of "min"
        _validate_all_constraints(CONSTRAINTS)

        _load()

        unknown = [name for name in CONSTRAINTS if name not in REGISTRY]
        if unknown:
            raise ValueError(f"Constraints given for undefined parameters: {unknown}")

        REGISTRY.freeze()
    except Exception as e:
        # Re-raise with context to help debugging initialization failures
        raise RuntimeError(
            f"Failed to initialize parameter registry: {e}\n"
            "This is likely a bug in the parameter definitions."
        ) from e

_init_registry()
