#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

""" register-yubikey-otp-device main program. """

import sys
import traceback

from ykdevice import __version__
from ykdevice.lib.messages import message
from ykdevice.lib.help import get_main_opts
from ykdevice.lib.messages import error_message
from ykdevice.lib.help.register import register_help
from ykdevice.lib.ldap.result_code import ResultCode
from ykdevice.lib.ldap.result_code import get_exit_status

from ykdevice.lib.exceptions import *

def main(argv=None):
    """ Run the tool and return the process exit status. """
    from ykdevice.lib import config
    if argv is None:
        argv = sys.argv[1:]
    command_line = list(argv)

    # Global options (-c, -d, -v, ...) come first.
    try:
        main_opts = get_main_opts(command_line)
    except YKDeviceException as e:
        error_message(str(e))
        return get_exit_status(ResultCode.PARAM_ERROR)

    # Check if user requested our version.
    try:
        show_version = main_opts.pop('show_version')
    except KeyError:
        show_version = False
    if show_version:
        message(__version__)
        return 0

    # Load config.
    try:
        config.load(main_opts=main_opts, quiet=True)
    except YKDeviceException as e:
        error_message(str(e))
        return get_exit_status(ResultCode.LOCAL_ERROR)

    # Register help after loading config (e.g. gettext configured).
    register_help()

    from ykdevice.lib.classes.register_yubikey_otp_device import RegisterYubiKeyOTPDevice
    tool = RegisterYubiKeyOTPDevice()

    if config.show_help:
        message(tool.get_usage())
        return 0

    try:
        result = tool.run(command_line)
    except YKDeviceException as e:
        if config.print_tracebacks:
            traceback.print_exc()
        error_message(str(e))
        result = ResultCode.LOCAL_ERROR

    return get_exit_status(result)

def ykdevice_commands():
    """ Console script entry point. """
    sys.exit(main())

if __name__ == "__main__":
    ykdevice_commands()
