# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os
import re

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

from ykdevice.lib.exceptions import *

MODHEX_CHARS = "cbdefghijklnrtuv"
HEX_CHARS = "0123456789abcdef"

otp_re = re.compile(f'^([{MODHEX_CHARS}]{{0,16}})([{MODHEX_CHARS}]{{32}})$')

def modhex2hex(string):
    retVal = ''
    for i in range (0, len(string)):
        pos = MODHEX_CHARS.find(string[i])
        if pos > -1:
            retVal += HEX_CHARS[pos]
        else:
            msg = _('"{char}": Character is not a valid modhex string')
            msg = msg.format(char=string[i])
            raise YKDeviceException(msg)
    return retVal

def get_public_id(otp):
    """ Get public ID (modhex prefix) of a YubiKey OTP. """
    if (len(otp) <= 32) or (len(otp) > 48):
        raise YKDeviceException(_("OTP length mismatch."))
    match = otp_re.match(otp)
    if match is None:
        raise YKDeviceException(_("OTP does not match expected syntax."))
    return match.group(1)
