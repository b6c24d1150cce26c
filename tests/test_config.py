# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
"""Tests for the tool config."""

import pytest

import ykdevice.lib
from ykdevice.lib.exceptions import AlreadyRegistered
from ykdevice.lib.exceptions import YKDeviceException


def write_config(config, tmp_path, content):
    config_file = tmp_path / 'ykdevice.conf'
    config_file.write_text(content)
    config.config_file = str(config_file)


class TestConfigVars:
    """Tests for config variable registration and type checks."""

    def test_is_global_config(self, config):
        assert ykdevice.lib.config is config

    def test_new_config_becomes_global(self, config):
        from ykdevice import __version__
        from ykdevice.lib.ykdevice_config import YKDeviceConfig
        new_config = YKDeviceConfig(auto_load=False)
        assert ykdevice.lib.config is new_config
        assert new_config.my_version == __version__

    def test_defaults(self, config):
        assert config.ldap_host == 'localhost'
        assert config.ldap_port is None
        assert config.connect_timeout == 10
        assert config.log_tool_invocation is True

    def test_register_twice(self, config):
        with pytest.raises(AlreadyRegistered):
            config.register_config_var('ldap_host', str, 'other')

    def test_register_config_file_parameter_twice(self, config):
        with pytest.raises(AlreadyRegistered):
            config.register_config_var('other_host', str, None,
                                       config_file_parameter='LDAP_HOST')

    def test_unknown_var(self, config):
        with pytest.raises(YKDeviceException):
            config.unknown_var = 1

    @pytest.mark.parametrize(
        ('name', 'value'),
        [
            ('ldap_port', '389'),
            ('ldap_port', True),
            ('ldap_use_ssl', 'yes'),
            ('ldap_host', 10),
        ],
    )
    def test_wrong_type(self, config, name, value):
        with pytest.raises(YKDeviceException):
            setattr(config, name, value)

    def test_none_is_always_valid(self, config):
        config.ldap_host = None
        assert config.ldap_host is None

    def test_debug_level(self, config):
        assert config.debug_level('net_traffic') == 0
        config.debug_level('net_traffic', 2)
        assert config.debug_level('net_traffic') == 2


class TestLoad:
    """Tests for loading the config file."""

    def test_missing_default_file(self, config):
        config.load(quiet=True)
        assert config.main_config == {}
        assert config.print_tracebacks is False

    def test_missing_given_file(self, config, tmp_path):
        with pytest.raises(YKDeviceException):
            config.load(main_opts={'config_file': str(tmp_path / 'missing.conf')}, quiet=True)

    def test_values(self, config, tmp_path):
        write_config(config, tmp_path, '\n'.join([
            '# Directory server.',
            'LDAP_HOST=ldap.example.com',
            'LDAP_PORT=1636',
            'LDAP_USE_SSL=true',
            'LDAP_BIND_DN="cn=Directory Manager"',
            'CONNECT_TIMEOUT=3',
            'LOGLEVEL=DEBUG',
            '',
        ]))
        config.load(quiet=True)
        assert config.ldap_host == 'ldap.example.com'
        assert config.ldap_port == 1636
        assert config.ldap_use_ssl is True
        assert config.ldap_bind_dn == 'cn=Directory Manager'
        assert config.connect_timeout == 3
        assert config.loglevel == 'DEBUG'

    def test_numeric_string_value(self, config, tmp_path):
        write_config(config, tmp_path, 'LDAP_BIND_PASSWORD_FILE=1234\n')
        config.load(quiet=True)
        assert config.ldap_bind_password_file == '1234'

    def test_command_line_wins(self, config, tmp_path):
        write_config(config, tmp_path, 'LOGFILE=/var/log/other.log\nFILE_LOGGING=false\n')
        config.load(main_opts={'logfile': '/tmp/test.log', 'file_logging': True}, quiet=True)
        assert config.logfile == '/tmp/test.log'
        assert config.file_logging is True

    def test_unknown_parameter(self, config, tmp_path, capsys):
        write_config(config, tmp_path, 'UNKNOWN_PARAMETER=1\nLDAP_HOST=ldap.example.com\n')
        config.load(quiet=True)
        assert 'Unknown config file parameter' in capsys.readouterr().err
        assert config.ldap_host == 'ldap.example.com'

    def test_invalid_value(self, config, tmp_path):
        write_config(config, tmp_path, 'LDAP_PORT=abc\n')
        with pytest.raises(YKDeviceException) as exc_info:
            config.load(quiet=True)
        assert 'LDAP_PORT' in str(exc_info.value)

    def test_loading_message(self, config, tmp_path, capsys):
        write_config(config, tmp_path, 'LDAP_HOST=ldap.example.com\n')
        config.load()
        assert 'Loading config file' in capsys.readouterr().out


class TestLogger:
    """Tests for the logger setup."""

    def test_null_logger(self, config):
        import logging
        logger = config.logger
        assert isinstance(logger.handlers[0], logging.NullHandler)
        assert logger.propagate is False

    def test_debug_logger(self, config):
        import logging
        config.debug_enabled = True
        logger = config.setup_logger()
        assert logger.level == logging.DEBUG
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_file_logger(self, config, tmp_path):
        config.file_logging = True
        config.logfile = str(tmp_path / 'test.log')
        logger = config.setup_logger()
        logger.info('file log message')
        for handler in logger.handlers:
            handler.flush()
        assert 'file log message' in (tmp_path / 'test.log').read_text()

    def test_unusable_logfile(self, config, tmp_path):
        config.file_logging = True
        config.logfile = str(tmp_path / 'missing' / 'test.log')
        with pytest.raises(YKDeviceException) as exc_info:
            config.logger
        assert 'Unable to set up logging' in str(exc_info.value)

    def test_verbose_logger(self, config, capsys):
        import logging
        config.verbose_level = 1
        logger = config.setup_logger()
        assert logger.level == logging.INFO
        logger.info('verbose message')
        assert 'verbose message' in capsys.readouterr().err
