# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os
import re
from prettytable import PrettyTable

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module_name}")
    msg = msg.format(module_name=__name__)
    print(msg)

from ykdevice.lib.exceptions import *

global_opts = []

command_map = {
    # ::        = required opt
    # :         = optional opt
    # :x=True:  = flag
    # !         = sensitive value (never logged)
    # file:     = value is a file path
    # a|b       = alternative spellings of the same opt
    }

debug_opts_mapping = {
                'd'         : 'base',
                'e'         : 'raise_exceptions',
                'm'         : 'module_loading',
                'N'         : 'net_traffic',
                't'         : 'debug_timestamps',
            }

def register_cmd_help(command, help_dict):
    global command_map
    if command not in command_map:
        command_map[command] = {}
    for x in help_dict:
        command_map[command][x] = help_dict[x]

def register_global_opt(opt, help_text):
    global global_opts
    global_opts.append((opt, help_text))

def get_cmd_help(command):
    global command_map
    try:
        help_dict = command_map[command]
    except KeyError:
        msg = _("Command not in command map: {command}")
        msg = msg.format(command=command)
        raise YKDeviceException(msg)
    return help_dict

register_global_opt("-c <config_file>", "Use alternative config file")
register_global_opt("-l <logfile>", "Log to the given file")
register_global_opt("--version", "Show version")
register_global_opt("-h, --help", "Show this help")
register_global_opt("-v", "Enable verbose mode")
register_global_opt("-d", "Enable debug mode. Multiple 'd' will increase debug level")
register_global_opt("-de", "Print tracebacks.")
register_global_opt("-dm", "Print loading of modules")
register_global_opt("-dN", "Debug directory server traffic. Multiple 'N' will increase detail level")
register_global_opt("-dt", "Enable timestamps in debug output")
register_global_opt("--color-logs", "Use colored logs.")

def get_help(command, error=None):
    """ Show command help. """
    help_dict = get_cmd_help(command)

    opt_table = []
    try:
        opts_help = help_dict['_help']
    except KeyError:
        opts_help = {}
    if opts_help:
        opt_table.append([ "Options:", "" ])
        for opt in opts_help:
            help_text = f"\t- {opts_help[opt]}"
            row = [ f"   {opt}", help_text ]
            opt_table.append(row)

    glob_opt_table = []
    try:
        include_global_opts = help_dict['_include_global_opts']
    except KeyError:
        include_global_opts = False
    if include_global_opts:
        glob_opt_table.append([ '', '' ])
        glob_opt_table.append([ 'Global options:', '' ])
        for x in global_opts:
            help_text = f"\t- {x[1]}"
            row = [ f"   {x[0]}", help_text ]
            glob_opt_table.append(row)

    table_headers = [ "option", "help" ]
    table = PrettyTable(table_headers, header_style="title")
    table.align = "l"
    table.padding_width = 0
    table.right_padding_width = 1

    for i in opt_table + glob_opt_table:
        table.add_row(i)

    # Get output string from table.
    output = table.get_string(header=False, border=False)

    message = []
    try:
        message.append(help_dict['_usage_help'])
    except KeyError:
        pass
    try:
        message.append("")
        message.append(help_dict['_description'])
    except KeyError:
        pass
    if output:
        message.append("")
        message.append(output)
    try:
        examples = help_dict['_examples']
    except KeyError:
        examples = []
    if examples:
        message.append("")
        message.append("Examples:")
        for example, description in examples:
            message.append(f"   {command} {example}")
            message.append(f"\t- {description}")
    if error is not None:
        message.append("")
        message.append(error)

    return "\n".join(message)

def get_main_opts(command_line):
    """
    Get main options from the start of command_line.

    Global options are removed from command_line. Anything else ends the
    global options.
    """
    main_opts = {}

    def set_debug_level(slot="base"):
        try:
            debug_levels = main_opts['debug_levels']
        except KeyError:
            debug_levels = {}
        try:
            x_debug_level = debug_levels[slot]
        except KeyError:
            x_debug_level = 0
        x_debug_level += 1
        debug_levels[slot] = x_debug_level
        main_opts['debug_levels'] = debug_levels
        if slot == "base":
            main_opts['verbose_level'] = 10
            main_opts['debug_enabled'] = True
        if slot == "module_loading":
            os.environ['YKDEVICE_DEBUG_MODULE_LOADING'] = "True"
        if slot == "raise_exceptions":
            main_opts['print_tracebacks'] = True

    def parse_debug_opts(opts):
        """ Parse debug option letters (e.g. -ddN). """
        for c in opts:
            try:
                debug_opt = debug_opts_mapping[c]
            except KeyError:
                msg = _("Invalid option: {option}")
                msg = msg.format(option=f"-d{c}")
                raise YKDeviceException(msg)
            set_debug_level(debug_opt)

    def get_value(option):
        command_line.pop(0)
        if len(command_line) == 0:
            msg = _("Option requires value: {option}")
            msg = msg.format(option=option)
            raise YKDeviceException(msg)
        return str(command_line.pop(0))

    verbose_re = re.compile('^-v+$')
    while len(command_line) > 0:
        if command_line[0].startswith("-d") \
        and not command_line[0].startswith("--"):
            sub_opts = command_line[0][2:]
            # -d is base debug, each further 'd' (-dd) increases it.
            if len(sub_opts) == 0 or sub_opts.startswith("d"):
                sub_opts = command_line[0][1:]
            parse_debug_opts(sub_opts)
            command_line.pop(0)
        elif verbose_re.match(command_line[0]):
            main_opts['verbose_level'] = len(command_line[0]) - 1
            command_line.pop(0)
        elif command_line[0] == "--color-logs":
            main_opts['color_logs'] = True
            command_line.pop(0)
        elif command_line[0] == "--version":
            main_opts['show_version'] = True
            command_line.pop(0)
        elif command_line[0] == "-h" or command_line[0] == "--help":
            main_opts['show_help'] = True
            command_line.pop(0)
        elif command_line[0] == "-l":
            main_opts['logfile'] = get_value("-l")
            main_opts['file_logging'] = True
        elif command_line[0] == "-c":
            main_opts['config_file'] = get_value("-c")
        else:
            break

    return main_opts
