# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
""" Register and deregister YubiKey OTP devices on a directory server. """

import gettext
import builtins

__project_name__ = "yubikey-otp-device"
__project_description__ = "Manage the YubiKey OTP devices of directory server accounts."
__version__ = "1.0.0"
__license__ = "GPLv3"
__author__ = "the2nd"
__author_email__ = "the2nd@otpme.org"
__status__ = "Development Status :: 5 - Production/Stable"

# Modules use _() at import time. Install a plain gettext until the config
# sets up the real locale (YKDeviceConfig.setup_locale()).
if not hasattr(builtins, "_"):
    def _(s, log=False):
        u = gettext.gettext(s)
        if not log:
            return u
        return u, u
    builtins._ = _
