# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os
import importlib

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

# Base help files.
help_dir = os.path.realpath(__file__)
help_dir = os.path.dirname(help_dir)

def register_help():
    """ Register help files. """
    help_modules = []
    for x_file in sorted(os.listdir(help_dir)):
        if not x_file.endswith(".py"):
            continue
        if x_file == "register.py":
            continue
        if x_file == "__init__.py":
            continue
        mod_name = x_file[:-3]
        help_modules.append(f"ykdevice.lib.help.{mod_name}")

    # Register modules.
    for x in help_modules:
        x_module = importlib.import_module(x)
        x_method = getattr(x_module, "register", None)
        if x_method is None:
            continue
        x_method()
