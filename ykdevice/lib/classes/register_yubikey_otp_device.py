# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

from ykdevice.lib import log
from ykdevice.lib import stuff
from ykdevice.lib import yubiotp
from ykdevice.lib.help import get_help
from ykdevice.lib.help import command_map
from ykdevice.lib.help import get_cmd_help
from ykdevice.lib.cli import ArgumentParser
from ykdevice.lib.messages import message
from ykdevice.lib.messages import error_message
from ykdevice.lib.ldap.client import ldap_session
from ykdevice.lib.password import get_password_source
from ykdevice.lib.ldap.extended import DeviceRequest
from ykdevice.lib.ldap.extended import submit_request
from ykdevice.lib.ldap.result_code import ResultCode
from ykdevice.lib.cli.constraints import get_constraints
from ykdevice.lib.ldap.client import ConnectionSettings

from ykdevice.lib.exceptions import *

class RegisterYubiKeyOTPDevice(object):
    """
    Register or deregister YubiKey OTP devices of a user.

    One invocation does one connect and sends one request. The run() result
    is the LDAP result code of the operation (or of what failed before).
    """
    command = "register-yubikey-otp-device"

    def __init__(self):
        if self.command not in command_map:
            from ykdevice.lib.help.register import register_help
            register_help()
        self.help_dict = get_cmd_help(self.command)
        self.parser = ArgumentParser(self.help_dict['cmd'],
                                    constraints=get_constraints(self.help_dict))

    def get_usage(self, error=None):
        return get_help(self.command, error=error)

    def validate(self):
        """ Tool specific argument checks. """
        # Values sent to the server must be UTF-8.
        for var_name in ("auth_id", "otp", "bind_dn", "hostname"):
            val = self.parser.get_value(var_name)
            if val is None:
                continue
            try:
                val.encode("utf-8")
            except UnicodeEncodeError:
                msg = _("Invalid value for {option}: Not valid UTF-8.")
                msg = msg.format(option=self.parser.get_argument(var_name).identifier)
                raise ArgumentException(msg)
        if self.parser.is_present("deregister"):
            return
        if self.parser.is_present("otp"):
            return
        msg = _("No OTP to register: The {otp_arg} argument is required unless "
                "--deregister is given.")
        msg = msg.format(otp_arg=self.parser.get_argument("otp").identifier)
        raise ArgumentException(msg)

    def parse_args(self, command_line):
        """ Parse and validate command line. No side effects. """
        self.parser.parse(command_line)
        self.parser.validate()
        self.validate()

    def get_int_arg(self, var_name, default=None):
        val = self.parser.get_value(var_name)
        if val is None:
            return default
        try:
            val = int(val)
        except ValueError:
            val = None
        if val is None or val < 0:
            msg = _("Invalid value for {option}: {value}")
            msg = msg.format(option=self.parser.get_argument(var_name).identifier,
                            value=self.parser.get_value(var_name))
            raise ArgumentException(msg)
        return val

    @property
    def auth_id(self):
        return self.parser.get_value("auth_id")

    @property
    def user_name(self):
        """ User name used in messages. """
        if self.auth_id is None:
            return _("<authenticated user>")
        return self.auth_id

    def get_password_source(self):
        """ Source of the static password of the user. """
        return get_password_source(password=self.parser.get_value("user_password"),
                        password_file=self.parser.get_value("user_password_file"),
                        prompt=self.parser.is_present("prompt_for_user_password"),
                        account=self.auth_id)

    def get_bind_dn(self):
        from ykdevice.lib import config
        bind_dn = self.parser.get_value("bind_dn")
        if bind_dn is None:
            bind_dn = config.ldap_bind_dn
        return bind_dn

    def get_bind_password_source(self):
        """ Source of the bind password (prompt if nothing else is given). """
        from ykdevice.lib import config
        bind_dn = self.get_bind_dn()
        password = self.parser.get_value("bind_password")
        password_file = self.parser.get_value("bind_password_file")
        prompt = self.parser.is_present("prompt_for_bind_password")
        if bind_dn is None:
            prompt = False
        elif password is None and password_file is None and not prompt:
            if config.ldap_bind_password_file:
                password_file = config.ldap_bind_password_file
            else:
                prompt = True
        prompt_text = _("Enter the bind password for {account}: ")
        return get_password_source(password=password,
                                password_file=password_file,
                                prompt=prompt,
                                account=bind_dn,
                                prompt_text=prompt_text)

    def get_connection_settings(self, bind_password=None):
        """ Get connection settings from command line and config. """
        from ykdevice.lib import config
        host = self.parser.get_value("hostname", config.ldap_host)
        port = self.get_int_arg("port", config.ldap_port)
        connect_timeout = self.get_int_arg("connect_timeout", config.connect_timeout)
        # Command line security options replace the ones from config.
        if self.parser.is_present("use_ssl") or self.parser.is_present("use_start_tls"):
            use_ssl = self.parser.is_present("use_ssl")
            use_start_tls = self.parser.is_present("use_start_tls")
        else:
            use_ssl = config.ldap_use_ssl
            use_start_tls = config.ldap_use_start_tls
        trust_all = self.parser.is_present("trust_all") or config.ldap_trust_all
        ca_cert_file = self.parser.get_value("ca_cert_file", config.ldap_ca_cert)
        try:
            settings = ConnectionSettings(host=host,
                                        port=port,
                                        use_ssl=use_ssl,
                                        use_start_tls=use_start_tls,
                                        trust_all=trust_all,
                                        ca_cert_file=ca_cert_file,
                                        bind_dn=self.get_bind_dn(),
                                        bind_password=bind_password,
                                        connect_timeout=connect_timeout)
        except YKDeviceException as e:
            raise ArgumentException(str(e))
        return settings

    def log_invocation(self, command_line):
        from ykdevice.lib import config
        if not config.log_tool_invocation:
            return
        redacted = log.redact_command_line(command_line,
                                self.parser.sensitive_identifiers)
        log_msg = _("Running: {command} {args}", log=True)[1]
        log_msg = log_msg.format(command=self.command, args=" ".join(redacted))
        config.logger.info(log_msg)

    def log_public_id(self, otp):
        from ykdevice.lib import config
        logger = config.logger
        try:
            public_id = yubiotp.get_public_id(otp)
        except YKDeviceException as e:
            # The server decides if the OTP is valid.
            log_msg = _("OTP is not a well-formed YubiKey OTP: {error}", log=True)[1]
            log_msg = log_msg.format(error=e)
            logger.debug(log_msg)
            return
        log_msg = _("YubiKey public ID: {public_id} ({hex_id})", log=True)[1]
        log_msg = log_msg.format(public_id=public_id,
                                hex_id=yubiotp.modhex2hex(public_id))
        logger.debug(log_msg)

    def get_result(self, result_code):
        """ Return ResultCode for known codes and plain int otherwise. """
        result = ResultCode.by_code(result_code)
        if result is None:
            return result_code
        return result

    def run(self, command_line):
        """ Run tool and return result code. """
        from ykdevice.lib import config
        logger = config.logger

        self.log_invocation(command_line)

        # Check arguments before doing anything.
        try:
            self.parse_args(command_line)
            settings = self.get_connection_settings()
        except ShowHelp:
            message(self.get_usage())
            return ResultCode.SUCCESS
        except ArgumentException as e:
            error_message(str(e))
            error_message(_("Use --help to get usage information."))
            return ResultCode.PARAM_ERROR

        # Get passwords.
        try:
            static_password = self.get_password_source().read()
        except PasswordReadError as e:
            msg = _("Unable to read the user password: {error}")
            msg = msg.format(error=e)
            error_message(msg)
            return ResultCode.LOCAL_ERROR
        try:
            settings.bind_password = self.get_bind_password_source().read()
        except PasswordReadError as e:
            msg = _("Unable to read the bind password: {error}")
            msg = msg.format(error=e)
            error_message(msg)
            return ResultCode.LOCAL_ERROR

        otp = self.parser.get_value("otp")
        deregister = self.parser.is_present("deregister")
        if otp is not None:
            self.log_public_id(otp)

        try:
            with ldap_session(settings) as conn:
                request = DeviceRequest.create(auth_id=self.auth_id,
                                            static_password=static_password,
                                            otp=otp,
                                            deregister=deregister)
                result = submit_request(conn, request)
        except ConnectionFailed as e:
            msg = _("Unable to establish a connection to the directory server: {error}")
            msg = msg.format(error=stuff.get_exception_message(e))
            error_message(msg)
            return self.get_result(e.result_code)

        if result.success:
            if not deregister:
                msg = _("Successfully registered the specified YubiKey OTP device for user {user}.")
            elif otp is not None:
                msg = _("Successfully deregistered the specified YubiKey OTP device for user {user}.")
            else:
                msg = _("Successfully deregistered all YubiKey OTP devices for user {user}.")
            msg = msg.format(user=self.user_name)
            message(msg)
            log_msg = _("{operation} request for {user} succeeded.", log=True)[1]
            log_msg = log_msg.format(operation=request.operation, user=self.user_name)
            logger.info(log_msg)
            return ResultCode.SUCCESS

        if deregister:
            msg = _("An error occurred while attempting to deregister the YubiKey OTP device(s) for user {user}: {result}")
        else:
            msg = _("An error occurred while attempting to register the YubiKey OTP device for user {user}: {result}")
        msg = msg.format(user=self.user_name, result=result)
        error_message(msg)
        log_msg = _("{operation} request for {user} failed: {result}", log=True)[1]
        log_msg = log_msg.format(operation=request.operation, user=self.user_name, result=result)
        logger.warning(log_msg)
        return self.get_result(result.result_code)
