# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

class YKDeviceException(Exception):
    pass

class AlreadyRegistered(YKDeviceException):
    pass

class UnknownConstant(YKDeviceException):
    pass

class ArgumentException(YKDeviceException):
    pass

class ShowHelp(YKDeviceException):
    pass

class PasswordReadError(YKDeviceException):
    pass

class LDAPError(YKDeviceException):
    """ Directory server error that carries an LDAP result code. """
    def __init__(self, msg, result_code):
        super(LDAPError, self).__init__(msg)
        self.result_code = result_code

class ConnectionFailed(LDAPError):
    pass
