# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

from ykdevice.lib.ykdevice_config import YKDeviceConfig

# The process wide config. The command entry point loads it.
config = YKDeviceConfig(auto_load=False)
