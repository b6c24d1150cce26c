# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os
from collections import namedtuple

from pyasn1.type import tag
from pyasn1.type import univ
from pyasn1.type import namedtype
from pyasn1.codec.ber import encoder
from ldap3.core.exceptions import LDAPException
from ldap3.core.exceptions import LDAPOperationResult
from ldap3.core.exceptions import LDAPCommunicationError

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

from ykdevice.lib import stuff
from ykdevice.lib.ldap.enums import DeviceOperation
from ykdevice.lib.ldap.result_code import ResultCode
from ykdevice.lib.ldap.result_code import get_result_code_string

from ykdevice.lib.exceptions import *

REGISTER_YUBIKEY_OTP_DEVICE_OID = "1.3.6.1.4.1.30221.2.6.54"
DEREGISTER_YUBIKEY_OTP_DEVICE_OID = "1.3.6.1.4.1.30221.2.6.55"

def context_octet_string(tag_id):
    """ OCTET STRING with implicit context specific tag [tag_id]. """
    implicit_tag = tag.Tag(tag.tagClassContext, tag.tagFormatSimple, tag_id)
    return univ.OctetString().subtype(implicitTag=implicit_tag)

class RegisterYubiKeyOTPDeviceValue(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.OptionalNamedType('authenticationID', context_octet_string(0)),
        namedtype.OptionalNamedType('staticPassword', context_octet_string(1)),
        namedtype.NamedType('yubiKeyOTP', context_octet_string(2)),
        )

class DeregisterYubiKeyOTPDeviceValue(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.OptionalNamedType('authenticationID', context_octet_string(0)),
        namedtype.OptionalNamedType('staticPassword', context_octet_string(1)),
        namedtype.OptionalNamedType('yubiKeyOTP', context_octet_string(2)),
        )

class DeviceRequest(namedtuple("DeviceRequest",
    ['operation', 'auth_id', 'static_password', 'otp'])):
    """ Register or deregister request for a YubiKey OTP device. """
    __slots__ = ()

    @classmethod
    def create(cls, auth_id=None, static_password=None, otp=None, deregister=False):
        """ Get request for the given arguments. """
        if deregister:
            if otp is None:
                operation = DeviceOperation.DEREGISTER_ALL
            else:
                operation = DeviceOperation.DEREGISTER
        else:
            if otp is None:
                msg = _("Cannot register YubiKey OTP device without OTP.")
                raise YKDeviceException(msg)
            operation = DeviceOperation.REGISTER
        return cls(operation, auth_id, static_password, otp)

    @property
    def oid(self):
        if self.operation == DeviceOperation.REGISTER:
            return REGISTER_YUBIKEY_OTP_DEVICE_OID
        return DEREGISTER_YUBIKEY_OTP_DEVICE_OID

    def __repr__(self):
        # Never show the static password.
        return (f"DeviceRequest(operation={self.operation}, "
                f"auth_id={self.auth_id!r}, otp={self.otp!r})")

def build_request_value(request):
    """ Get BER encoded value of the given request. """
    if request.operation == DeviceOperation.REGISTER:
        value = RegisterYubiKeyOTPDeviceValue()
    else:
        value = DeregisterYubiKeyOTPDeviceValue()
    # Deregister requests may have no component at all.
    value.clear()
    if request.auth_id is not None:
        value['authenticationID'] = request.auth_id.encode("utf-8")
    if request.static_password is not None:
        value['staticPassword'] = request.static_password
    if request.otp is not None:
        value['yubiKeyOTP'] = request.otp.encode("utf-8")
    return encoder.encode(value)

class ExtendedResult(object):
    """ Result of an extended operation. """
    def __init__(self, result_code, diagnostic_message=None, matched_dn=None,
        referrals=None, response_name=None, response_value=None):
        self.result_code = result_code
        self.diagnostic_message = diagnostic_message
        self.matched_dn = matched_dn
        self.referrals = referrals
        self.response_name = response_name
        self.response_value = response_value

    @classmethod
    def from_ldap3_result(cls, result):
        """ Get result from ldap3 result dict (conn.result). """
        return cls(result_code=result['result'],
                diagnostic_message=result.get('message') or None,
                matched_dn=result.get('dn') or None,
                referrals=result.get('referrals') or None,
                response_name=result.get('responseName'),
                response_value=result.get('responseValue'))

    @classmethod
    def from_exception(cls, e):
        """ Convert exception raised while processing a request. """
        if isinstance(e, LDAPOperationResult):
            return cls(result_code=e.result,
                    diagnostic_message=e.message or None,
                    matched_dn=e.dn or None)
        if isinstance(e, (LDAPCommunicationError, OSError)):
            result_code = ResultCode.SERVER_DOWN.code
        else:
            result_code = ResultCode.LOCAL_ERROR.code
        return cls(result_code=result_code,
                diagnostic_message=stuff.get_exception_message(e))

    @property
    def success(self):
        return self.result_code == ResultCode.SUCCESS.code

    @property
    def description(self):
        result_code = ResultCode.by_code(self.result_code)
        if result_code is None:
            return str(self.result_code)
        return result_code.description

    def __str__(self):
        result_string = get_result_code_string(self.result_code)
        result_string = f"ExtendedResult(resultCode={result_string}"
        if self.diagnostic_message:
            result_string = f"{result_string}, diagnosticMessage='{self.diagnostic_message}'"
        if self.matched_dn:
            result_string = f"{result_string}, matchedDN='{self.matched_dn}'"
        if self.referrals:
            referrals = "', '".join(self.referrals)
            result_string = f"{result_string}, referralURLs={{'{referrals}'}}"
        if self.response_name:
            result_string = f"{result_string}, responseOID='{self.response_name}'"
        return f"{result_string})"

def submit_request(conn, request):
    """
    Send request via the given ldap3 connection.

    Exceptions raised by ldap3 are converted to a failed ExtendedResult.
    """
    from ykdevice.lib import config
    logger = config.logger
    request_value = build_request_value(request)
    log_msg = _("Sending {operation} request ({oid}) for: {auth_id}", log=True)[1]
    log_msg = log_msg.format(operation=request.operation,
                            oid=request.oid,
                            auth_id=request.auth_id)
    logger.debug(log_msg)
    try:
        conn.extended(request.oid, request_value)
    except (LDAPException, OSError) as e:
        log_msg = _("Request failed: {e}", log=True)[1]
        log_msg = log_msg.format(e=stuff.get_exception_message(e))
        logger.warning(log_msg)
        return ExtendedResult.from_exception(e)
    result = ExtendedResult.from_ldap3_result(conn.result)
    log_msg = _("Got result: {result}", log=True)[1]
    log_msg = log_msg.format(result=result)
    logger.debug(log_msg)
    return result
