# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os
import sys
import pprint
from termcolor import colored

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {__name__}")
    msg = msg.format(__name__=__name__)
    print(msg)

def message(msg, newline=True, stderr=False, prefix=None):
    """ Print a user message to stdout """
    print_method = sys.stdout
    if stderr:
        print_method = sys.stderr
    if not isinstance(msg, str):
        msg = pprint.pformat(msg)
    if prefix is not None:
        msg = f"{prefix}{msg}"
    if newline:
        print_method.write(f"{msg}\n")
    else:
        print_method.write(msg)
    print_method.flush()

def error_message(msg, color=True, **kwargs):
    """ Print a user message to stderr """
    if color:
        msg = colored(msg, 'red')
    message(msg, stderr=True, **kwargs)
