# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os
import gettext

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    print(f"Loading module: {__name__}")

import ykdevice
from ykdevice.lib.messages import message
from ykdevice.lib.messages import error_message

from ykdevice.lib.exceptions import *

DEFAULT_CONFIG_FILE = "/etc/ykdevice/ykdevice.conf"

class YKDeviceConfig(object):
    # Attributes that are not config variables.
    internal_vars = [
                    'config_var_types',
                    'configfile_var_map',
                    'command_line_opts',
                    ]

    def __init__(self, tool_name="register-yubikey-otp-device",
        auto_load=True, quiet=False):
        # Valid config variables and their type.
        self.config_var_types = {}
        # Config file parameter -> config variable.
        self.configfile_var_map = {}
        # Variables set by command line (override config file).
        self.command_line_opts = []
        self.register_config_var("tool_name", str, tool_name)
        self.register_config_var("my_version", str, ykdevice.__version__)
        self.register_config_var("config_file", str, DEFAULT_CONFIG_FILE)
        self.register_config_var("main_config", dict, None)
        self.register_config_var("_logger", None, None)
        # Directory server settings.
        self.register_config_var("ldap_host", str, "localhost",
                            config_file_parameter="LDAP_HOST")
        self.register_config_var("ldap_port", int, None,
                            config_file_parameter="LDAP_PORT")
        self.register_config_var("ldap_bind_dn", str, None,
                            config_file_parameter="LDAP_BIND_DN")
        self.register_config_var("ldap_bind_password_file", str, None,
                            config_file_parameter="LDAP_BIND_PASSWORD_FILE")
        self.register_config_var("ldap_use_ssl", bool, False,
                            config_file_parameter="LDAP_USE_SSL")
        self.register_config_var("ldap_use_start_tls", bool, False,
                            config_file_parameter="LDAP_USE_START_TLS")
        self.register_config_var("ldap_ca_cert", str, None,
                            config_file_parameter="LDAP_CA_CERT")
        self.register_config_var("ldap_trust_all", bool, False,
                            config_file_parameter="LDAP_TRUST_ALL")
        self.register_config_var("connect_timeout", int, 10,
                            config_file_parameter="CONNECT_TIMEOUT")
        # Log settings.
        self.register_config_var("loglevel", str, "INFO",
                            config_file_parameter="LOGLEVEL")
        self.register_config_var("file_logging", bool, False,
                            config_file_parameter="FILE_LOGGING")
        self.register_config_var("logfile", str, "/var/log/ykdevice/ykdevice.log",
                            config_file_parameter="LOGFILE")
        self.register_config_var("syslog_enabled", bool, False,
                            config_file_parameter="SYSLOG_ENABLED")
        self.register_config_var("syslog_address", str, "/dev/log",
                            config_file_parameter="SYSLOG_ADDRESS")
        self.register_config_var("syslog_facility", str, "USER",
                            config_file_parameter="SYSLOG_FACILITY")
        self.register_config_var("color_logs", bool, False,
                            config_file_parameter="COLOR_LOGS")
        self.register_config_var("log_tool_invocation", bool, True,
                            config_file_parameter="LOG_TOOL_INVOCATION")
        self.register_config_var("print_tracebacks", bool, None,
                            config_file_parameter="TRACEBACKS")
        self.register_config_var("language", str, "en",
                            config_file_parameter="LANGUAGE")
        self.register_config_var("locale_dir", str, None)
        # Debug settings (set by command line).
        self.register_config_var("debug_enabled", bool, False)
        self.register_config_var("debug_levels", dict, {})
        self.register_config_var("verbose_level", int, 0)
        self.register_config_var("show_help", bool, False)
        self.register_config_var("show_version", bool, False)

        # Make us the global config.
        import ykdevice.lib as ykdevice_lib
        ykdevice_lib.config = self

        if auto_load:
            self.load(quiet=quiet)

    def __setattr__(self, name, value):
        """ Handle config variables and type checks. """
        if name in self.internal_vars:
            return object.__setattr__(self, name, value)
        try:
            var_types = self.config_var_types[name]
        except KeyError:
            msg = _("Unknown config variable: {name}")
            msg = msg.format(name=name)
            raise YKDeviceException(msg)
        if value is not None:
            valid_value = False
            for var_type in var_types:
                if var_type is None:
                    valid_value = True
                    break
                # bool is a subclass of int.
                if var_type is int and isinstance(value, bool):
                    continue
                if not isinstance(value, var_type):
                    continue
                valid_value = True
                break
            if valid_value is False:
                msg = _("Invalid value type for <{name}>: Need <{var_types}>: Got <{value_type}>")
                msg = msg.format(name=name, var_types=var_types, value_type=type(value))
                raise YKDeviceException(msg)
        self.__dict__[name] = value

    def register_config_var(self, name, vtypes,
        default_value=None, config_file_parameter=None):
        """ Register config variable. """
        if name in self.config_var_types:
            msg = _("Config variable already registered: {name}")
            msg = msg.format(name=name)
            raise AlreadyRegistered(msg)
        if not isinstance(vtypes, list):
            vtypes = [vtypes]
        self.config_var_types[name] = vtypes
        setattr(self, name, default_value)
        # Register config file parameter.
        if config_file_parameter:
            if config_file_parameter in self.configfile_var_map:
                msg = _("Config file parameter already registered: {config_file_parameter}")
                msg = msg.format(config_file_parameter=config_file_parameter)
                raise AlreadyRegistered(msg)
            self.configfile_var_map[config_file_parameter] = name

    def process_config_file_param(self, name, val):
        """ Convert config file value to the type of the config variable. """
        val_types = self.config_var_types[name]
        if list in val_types:
            if isinstance(val, str):
                if "," in val:
                    # Replace spaces before/after comma.
                    val = val.replace(" ","").split(",")
                else:
                    # Make string a list.
                    val = [val]
        elif str in val_types:
            # e.g. LDAP_HOST=10 or a numeric password file name.
            if not isinstance(val, str) and not isinstance(val, bool):
                val = str(val)
        return val

    def setup_locale(self, language):
        """ Install _() for the given language. """
        t = gettext.translation('ykdevice',
                            self.locale_dir,
                            languages=[language],
                            fallback=True)

        def get_locales(s, log=False):
            u = t.gettext(s)
            if not log:
                return u
            # Log messages are not translated.
            return u, s

        import builtins
        builtins._ = get_locales

    def load(self, main_opts=None, quiet=False):
        """ Load config. """
        # Setup locale.
        self.setup_locale("en")

        # Set variables from command line options.
        if main_opts:
            for var in main_opts:
                self.command_line_opts.append(var)
                setattr(self, var, main_opts[var])

        # Try to read main config file.
        self.main_config = self.read(quiet=quiet)

        # Map config file values to variables.
        for parameter in self.main_config:
            if not parameter in self.configfile_var_map:
                msg = _("Unknown config file parameter: {config_file}: {parameter}")
                msg = msg.format(config_file=self.config_file, parameter=parameter)
                error_message(msg)
                continue
            var = self.configfile_var_map[parameter]
            val = self.main_config[parameter]
            # Ignore empty values.
            if val is None or len(str(val)) == 0:
                continue
            # Do not override command line options.
            if var in self.command_line_opts:
                continue
            val = self.process_config_file_param(var, val)
            try:
                setattr(self, var, val)
            except YKDeviceException as e:
                msg = _("Unable to set config parameter: {parameter}: {e}")
                msg = msg.format(parameter=parameter, e=e)
                raise YKDeviceException(msg)

        # Default is to not print tracebacks.
        if self.print_tracebacks is None:
            self.print_tracebacks = False

        # Setup locale.
        self.setup_locale(self.language)

    def read(self, quiet=False):
        """ Read config file. """
        from ykdevice.lib import stuff
        if not os.path.exists(self.config_file):
            # The default config file is optional.
            if "config_file" not in self.command_line_opts:
                return {}
            msg = _("Missing config file: {config_file}")
            msg = msg.format(config_file=self.config_file)
            raise YKDeviceException(msg)
        try:
            # Open config file for reading.
            fd = open(self.config_file, 'r')
        except (OSError, IOError) as error:
            msg = _("Error reading config file: {error}")
            msg = msg.format(error=error)
            raise YKDeviceException(msg)

        if not quiet:
            msg = _("Loading config file '{config_file}'.")
            msg = msg.format(config_file=self.config_file)
            message(msg)

        try:
            file_content = fd.read()
        finally:
            fd.close()

        # Convert config file content to dict.
        main_config = stuff.conf_to_dict(file_content)
        return main_config

    def debug_level(self, slot="base", new_level=None):
        """ Get/set debug level. """
        # Set new level.
        if new_level is None:
            # Get current level.
            try:
                level = self.debug_levels[slot]
            except KeyError:
                level = 0
            return level
        self.debug_levels[slot] = new_level

    @property
    def logger(self):
        if not self._logger:
            self.setup_logger()
        return self._logger

    def setup_logger(self, banner=None, timestamps=None, pid=True):
        """ Configure logger. """
        from ykdevice.lib import log
        logger_loglevel = self.loglevel
        logger_logfile = None
        logger_syslog = False
        logger_stderr = False

        # By default we want get_logger() to use the log name as banner.
        if banner is None:
            banner = True

        # Set timestamps to True if it was not explicitly set and debug timestamps
        # are enabled.
        if timestamps is None:
            if self.debug_level("debug_timestamps") > 0:
                timestamps = True

        # If debug is enabled (-d) force loglevel to "DEBUG".
        if self.debug_enabled:
            logger_loglevel = "DEBUG"

        if self.file_logging:
            logger_logfile = self.logfile
        elif self.syslog_enabled:
            logger_syslog = True
        elif self.debug_enabled or self.verbose_level > 0:
            # Print log messages to stderr.
            logger_stderr = True

        try:
            self._logger = log.get_logger(log_name=self.tool_name,
                                        level=logger_loglevel,
                                        syslog=logger_syslog,
                                        syslog_address=self.syslog_address,
                                        facility=self.syslog_facility,
                                        pid=pid,
                                        banner=banner,
                                        logfile=logger_logfile,
                                        timestamps=timestamps,
                                        color_logs=self.color_logs,
                                        stderr_log=logger_stderr)
        except (OSError, ValueError) as e:
            msg = _("Unable to set up logging: {error}")
            msg = msg.format(error=e)
            raise YKDeviceException(msg)

        # Directory server traffic (-dN).
        log.setup_library_logging(self.debug_level("net_traffic"),
                                handlers=self._logger.handlers)
        return self._logger
