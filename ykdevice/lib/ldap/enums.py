# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

from ykdevice.lib.named_enum import CodedEnum

class DeviceOperation(CodedEnum):
    """ What a YubiKey OTP device request asks the server to do. """
    REGISTER = 0
    DEREGISTER = 1
    DEREGISTER_ALL = 2

class NotificationDestinationChangeType(CodedEnum):
    """ How a set notification destination request changes the destination. """
    REPLACE = 0
    ADD = 1
    DELETE = 2

class BackendLockBehavior(CodedEnum):
    """ When a transaction may acquire the exclusive backend lock. """
    DO_NOT_ACQUIRE = 0
    ACQUIRE_AFTER_RETRIES = 1
    ACQUIRE_BEFORE_RETRIES = 2
    ACQUIRE_BEFORE_INITIAL_ATTEMPT = 3
