# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os
import ssl
import ldap3
from contextlib import contextmanager
from ldap3.core.exceptions import LDAPException

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

from ykdevice.lib import stuff
from ykdevice.lib.ldap.result_code import ResultCode

from ykdevice.lib.exceptions import *

class ConnectionSettings(object):
    """ Where and how to connect to the directory server. """
    def __init__(self, host="localhost", port=None, use_ssl=False,
        use_start_tls=False, trust_all=False, ca_cert_file=None,
        bind_dn=None, bind_password=None, connect_timeout=None):
        if use_ssl and use_start_tls:
            msg = _("SSL and StartTLS cannot be used together.")
            raise YKDeviceException(msg)
        if port is None:
            if use_ssl:
                port = 636
            else:
                port = 389
        self.host = host
        self.port = port
        self.use_ssl = use_ssl
        self.use_start_tls = use_start_tls
        self.trust_all = trust_all
        self.ca_cert_file = ca_cert_file
        self.bind_dn = bind_dn
        self.bind_password = bind_password
        self.connect_timeout = connect_timeout

    @property
    def server_uri(self):
        if self.use_ssl:
            return f"ldaps://{self.host}:{self.port}"
        return f"ldap://{self.host}:{self.port}"

    def get_tls(self):
        if not self.use_ssl and not self.use_start_tls:
            return None
        if self.trust_all:
            validate = ssl.CERT_NONE
        else:
            validate = ssl.CERT_REQUIRED
        return ldap3.Tls(validate=validate, ca_certs_file=self.ca_cert_file)

    def __repr__(self):
        # Never show the bind password.
        return (f"<ConnectionSettings {self.server_uri} "
                f"start_tls={self.use_start_tls} bind_dn={self.bind_dn}>")

def get_ldap_connection(settings):
    """ Connect (and bind) to the directory server. """
    from ykdevice.lib import config
    logger = config.logger

    bind_password = settings.bind_password
    if isinstance(bind_password, bytes):
        bind_password = bind_password.decode("utf-8")

    try:
        ldap_server = ldap3.Server(host=settings.host,
                                port=settings.port,
                                use_ssl=settings.use_ssl,
                                tls=settings.get_tls(),
                                get_info=ldap3.NONE,
                                connect_timeout=settings.connect_timeout)
        conn = ldap3.Connection(ldap_server,
                                user=settings.bind_dn,
                                password=bind_password,
                                raise_exceptions=False)
    except LDAPException as e:
        msg = _("Invalid connection settings: {error}")
        msg = msg.format(error=stuff.get_exception_message(e))
        raise ConnectionFailed(msg, ResultCode.PARAM_ERROR.code)

    log_msg = _("Connecting to server: {server_uri}", log=True)[1]
    log_msg = log_msg.format(server_uri=settings.server_uri)
    logger.debug(log_msg)

    def connection_failed(msg, result_code):
        log_msg = _("Error connecting to server: {server_uri}: {error}", log=True)[1]
        log_msg = log_msg.format(server_uri=settings.server_uri, error=msg)
        logger.warning(log_msg)
        close_connection(conn)
        raise ConnectionFailed(msg, result_code)

    try:
        conn.open()
        if settings.use_start_tls:
            if not conn.start_tls():
                msg = _("StartTLS failed: {error}")
                msg = msg.format(error=get_result_message(conn))
                connection_failed(msg, get_result_code(conn))
        if settings.bind_dn:
            if not conn.bind():
                msg = _("Bind failed: {error}")
                msg = msg.format(error=get_result_message(conn))
                connection_failed(msg, get_result_code(conn))
    except (LDAPException, OSError) as e:
        connection_failed(stuff.get_exception_message(e),
                        ResultCode.CONNECT_ERROR.code)

    return conn

def get_result_code(conn):
    """ Get result code of the last operation (CONNECT_ERROR if none). """
    try:
        result_code = conn.result['result']
    except (KeyError, TypeError):
        result_code = None
    if not result_code:
        result_code = ResultCode.CONNECT_ERROR.code
    return result_code

def get_result_message(conn):
    try:
        result = conn.result
        description = result['description']
        message = result['message']
    except (KeyError, TypeError):
        return _("No response from server.")
    if message:
        return f"{description}: {message}"
    return description

def close_connection(conn):
    """ Unbind connection. Errors are logged only. """
    from ykdevice.lib import config
    try:
        conn.unbind()
    except (LDAPException, OSError) as e:
        log_msg = _("Error closing connection: {error}", log=True)[1]
        log_msg = log_msg.format(error=stuff.get_exception_message(e))
        config.logger.warning(log_msg)

@contextmanager
def ldap_session(settings):
    """ Connected ldap3 connection that is always closed on exit. """
    conn = get_ldap_connection(settings)
    try:
        yield conn
    finally:
        close_connection(conn)
