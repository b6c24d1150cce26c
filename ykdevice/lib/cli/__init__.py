# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

from ykdevice.lib import stuff

from ykdevice.lib.exceptions import *

def read_pass(prompt='Password: '):
    """
    Read password from terminal without echo.

    @oarg:prompt:str Password prompt.

    @example:
        input = read_pass(prompt="Password: ")
    """
    import getpass
    return str(getpass.getpass(prompt))

def check_string(x, start_chars, end_chars=None):
    """ Strip start_chars (and end_chars) from x or raise ValueError. """
    if not x.startswith(start_chars):
        msg = _("String does not start with: {start_chars}")
        msg = msg.format(start_chars=start_chars)
        raise ValueError(msg)
    if end_chars and not x.endswith(end_chars):
        msg = _("String does not end with: {end_chars}")
        msg = msg.format(end_chars=end_chars)
        raise ValueError(msg)
    start_chars_len = len(start_chars)
    if end_chars:
        end_chars_len = len(end_chars)
        x = x[start_chars_len:-end_chars_len]
    else:
        x = x[start_chars_len:]
    return x

class Argument(object):
    """ A command line argument declared in a command syntax string. """
    def __init__(self, identifiers, var_name, flag=False, flag_value=None,
        required=False, sensitive=False, is_file=False):
        self.identifiers = identifiers
        self.var_name = var_name
        self.flag = flag
        self.flag_value = flag_value
        self.required = required
        self.sensitive = sensitive
        self.is_file = is_file

    @property
    def identifier(self):
        """ The primary spelling (used in messages). """
        return self.identifiers[0]

    def __repr__(self):
        # Never show values here.
        return f"<Argument {self.identifier} ({self.var_name})>"

def parse_command_syntax(command_syntax):
    """
    Get argument declarations from command syntax string.

    The syntax is a list of "<identifiers> <value spec>" pairs, e.g.
    "--authID|--auth-id :auth_id: --deregister :deregister=True:".
    """
    arguments = []
    seen_identifiers = []
    cmd_list = command_syntax.split()
    while len(cmd_list) > 0:
        cmd_part = cmd_list.pop(0)
        try:
            check_string(cmd_part, "-")
        except ValueError:
            msg = _("Unknown parameter in command template: {para}")
            msg = msg.format(para=cmd_part)
            raise YKDeviceException(msg)
        identifiers = cmd_part.split("|")
        for x in identifiers:
            if x in seen_identifiers:
                msg = _("Duplicate option in command template: {option}")
                msg = msg.format(option=x)
                raise YKDeviceException(msg)
            seen_identifiers.append(x)
        try:
            val = cmd_list.pop(0)
        except IndexError:
            msg = _("Missing value spec in command template: {option}")
            msg = msg.format(option=cmd_part)
            raise YKDeviceException(msg)

        required = False
        try:
            val = check_string(val, "::", "::")
            required = True
        except ValueError:
            try:
                val = check_string(val, ":", ":")
            except ValueError:
                msg = _("Invalid value spec in command template: {val}")
                msg = msg.format(val=val)
                raise YKDeviceException(msg)

        sensitive = False
        try:
            val = check_string(val, "!")
            sensitive = True
        except ValueError:
            pass

        is_file = False
        try:
            val = check_string(val, "file:")
            is_file = True
        except ValueError:
            pass

        flag = False
        flag_value = None
        if "=" in val:
            flag = True
            val, flag_value = val.split("=", 1)
            flag_value = stuff.string_to_type(flag_value)

        argument = Argument(identifiers=identifiers,
                            var_name=val,
                            flag=flag,
                            flag_value=flag_value,
                            required=required,
                            sensitive=sensitive,
                            is_file=is_file)
        arguments.append(argument)
    return arguments

class ArgumentParser(object):
    """ Parse a command line against a command syntax string. """
    def __init__(self, command_syntax, constraints=None):
        self.arguments = parse_command_syntax(command_syntax)
        self.constraints = []
        if constraints:
            self.constraints = list(constraints)
        self.command_args = {}

    def add_constraint(self, constraint):
        self.constraints.append(constraint)

    def get_argument(self, name):
        """ Get argument by identifier (e.g. --authID) or variable name. """
        for x in self.arguments:
            if name in x.identifiers:
                return x
            if name == x.var_name:
                return x
        return None

    @property
    def sensitive_identifiers(self):
        """ All spellings of arguments with a sensitive value. """
        identifiers = []
        for x in self.arguments:
            if not x.sensitive:
                continue
            identifiers += x.identifiers
        return identifiers

    def parse(self, command_line):
        """ Parse command line into self.command_args. """
        self.command_args = {}
        command_line = list(command_line)
        while len(command_line) > 0:
            opt = command_line.pop(0)
            if opt == "-h" or opt == "--help":
                raise ShowHelp()
            if opt == "--":
                if command_line:
                    msg = _("Unknown parameter: {parameter}")
                    msg = msg.format(parameter=command_line[0])
                    raise ArgumentException(msg)
                break
            if not opt.startswith("-"):
                msg = _("Unknown parameter: {parameter}")
                msg = msg.format(parameter=opt)
                raise ArgumentException(msg)
            opt_val = None
            inline_value = False
            if "=" in opt:
                opt, opt_val = opt.split("=", 1)
                inline_value = True
            argument = self.get_argument(opt)
            if argument is None:
                msg = _("Unknown option: {option}")
                msg = msg.format(option=opt)
                raise ArgumentException(msg)
            if argument.var_name in self.command_args:
                msg = _("Option given more than once: {option}")
                msg = msg.format(option=opt)
                raise ArgumentException(msg)
            if argument.flag:
                if inline_value:
                    msg = _("Option does not take a value: {option}")
                    msg = msg.format(option=opt)
                    raise ArgumentException(msg)
                self.command_args[argument.var_name] = argument.flag_value
                continue
            if not inline_value:
                if len(command_line) == 0:
                    msg = _("Option requires value: {option}")
                    msg = msg.format(option=opt)
                    raise ArgumentException(msg)
                opt_val = command_line.pop(0)
            if argument.is_file:
                opt_val = os.path.expanduser(opt_val)
            self.command_args[argument.var_name] = opt_val

        # Make sure we got all required options.
        missing_opts = []
        for x in self.arguments:
            if not x.required:
                continue
            if x.var_name in self.command_args:
                continue
            missing_opts.append(x.identifier)
        if missing_opts:
            msg = _("Command incomplete: Missing options: {options}")
            msg = msg.format(options=', '.join(missing_opts))
            raise ArgumentException(msg)

        return self.command_args

    def validate(self):
        """ Check all constraints in declaration order. """
        for constraint in self.constraints:
            constraint.check(self)

    def is_present(self, var_name):
        return var_name in self.command_args

    def get_value(self, var_name, default=None):
        try:
            return self.command_args[var_name]
        except KeyError:
            return default
