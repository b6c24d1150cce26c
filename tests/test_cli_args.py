# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
"""Tests for command syntax parsing and argument constraints."""

import pytest

from conftest import TEST_OTP
from ykdevice.lib.cli import ArgumentParser
from ykdevice.lib.cli import parse_command_syntax
from ykdevice.lib.cli.constraints import DependentArgumentSet
from ykdevice.lib.cli.constraints import ExclusiveArgumentSet
from ykdevice.lib.classes.register_yubikey_otp_device import RegisterYubiKeyOTPDevice
from ykdevice.lib.exceptions import ShowHelp
from ykdevice.lib.exceptions import ArgumentException
from ykdevice.lib.exceptions import YKDeviceException


@pytest.fixture
def tool():
    return RegisterYubiKeyOTPDevice()


class TestCommandSyntax:
    """Tests for parse_command_syntax."""

    def test_argument_kinds(self):
        arguments = parse_command_syntax(
            '--name|-n ::name:: --secret :!secret: --file :file:path: --force :force=True:'
        )
        name, secret, path, force = arguments
        assert name.identifiers == ['--name', '-n']
        assert name.identifier == '--name'
        assert name.required is True
        assert secret.sensitive is True
        assert secret.var_name == 'secret'
        assert path.is_file is True
        assert path.var_name == 'path'
        assert force.flag is True
        assert force.flag_value is True

    def test_repr_hides_nothing_but_names(self):
        argument = parse_command_syntax('--secret :!secret:')[0]
        assert repr(argument) == '<Argument --secret (secret)>'

    @pytest.mark.parametrize(
        'syntax',
        [
            'name :name:',
            '--name',
            '--name name',
            '--name :name: --name :other:',
        ],
    )
    def test_invalid_syntax(self, syntax):
        with pytest.raises(YKDeviceException):
            parse_command_syntax(syntax)


class TestArgumentParser:
    """Tests for ArgumentParser.parse."""

    def test_aliases(self, tool):
        tool.parser.parse(['--authenticationID', 'u:test.user', '--otp', TEST_OTP])
        assert tool.parser.get_value('auth_id') == 'u:test.user'
        tool.parser.parse(['--auth-id', 'u:other'])
        assert tool.parser.get_value('auth_id') == 'u:other'

    def test_inline_value(self, tool):
        tool.parser.parse(['--authID=u:test.user', '--port=1389'])
        assert tool.parser.get_value('auth_id') == 'u:test.user'
        assert tool.parser.get_value('port') == '1389'

    def test_flags(self, tool):
        tool.parser.parse(['--deregister', '--useSSL'])
        assert tool.parser.is_present('deregister')
        assert tool.parser.is_present('use_ssl')
        assert not tool.parser.is_present('use_start_tls')

    def test_get_value_default(self, tool):
        tool.parser.parse([])
        assert tool.parser.get_value('hostname', 'localhost') == 'localhost'

    def test_file_value_expands_user(self, tool, monkeypatch):
        monkeypatch.setenv('HOME', '/home/test')
        tool.parser.parse(['--userPasswordFile', '~/pw.txt'])
        assert tool.parser.get_value('user_password_file') == '/home/test/pw.txt'

    @pytest.mark.parametrize(
        ('command_line', 'error'),
        [
            (['--unknown'], 'Unknown option: --unknown'),
            (['positional'], 'Unknown parameter: positional'),
            (['--', 'extra'], 'Unknown parameter: extra'),
            (['--otp'], 'Option requires value: --otp'),
            (['--otp', 'a', '--otp', 'b'], 'Option given more than once: --otp'),
            (['--authID', 'a', '--auth-id', 'b'], 'Option given more than once: --auth-id'),
            (['--deregister=yes'], 'Option does not take a value: --deregister'),
        ],
    )
    def test_errors(self, tool, command_line, error):
        with pytest.raises(ArgumentException) as exc_info:
            tool.parser.parse(command_line)
        assert error in str(exc_info.value)

    @pytest.mark.parametrize('help_opt', ['-h', '--help'])
    def test_help(self, tool, help_opt):
        with pytest.raises(ShowHelp):
            tool.parser.parse(['--otp', TEST_OTP, help_opt])

    def test_missing_required(self):
        parser = ArgumentParser('--name|-n ::name:: --other :other:')
        with pytest.raises(ArgumentException) as exc_info:
            parser.parse(['--other', 'x'])
        assert 'Missing options: --name' in str(exc_info.value)

    def test_sensitive_identifiers(self, tool):
        identifiers = tool.parser.sensitive_identifiers
        assert '--userPassword' in identifiers
        assert '--user-password' in identifiers
        assert '--bindPassword' in identifiers
        assert '--bind-password' in identifiers
        assert '--otp' not in identifiers

    def test_get_argument(self, tool):
        assert tool.parser.get_argument('--authentication-id').var_name == 'auth_id'
        assert tool.parser.get_argument('auth_id').identifier == '--authID'
        assert tool.parser.get_argument('--nothing') is None


class TestConstraints:
    """Tests for argument constraints."""

    @pytest.mark.parametrize(
        ('command_line', 'error'),
        [
            (
                ['--authID', 'u:x', '--userPassword', 'pw', '--promptForUserPassword', '--otp', TEST_OTP],
                'Only one of the user password arguments may be given: --userPassword, --promptForUserPassword',
            ),
            (
                ['--bindDN', 'cn=x', '--bindPassword', 'pw', '--bindPasswordFile', '/tmp/pw', '--otp', TEST_OTP],
                'Only one of the bind password arguments may be given',
            ),
            (
                ['--useSSL', '--useStartTLS', '--otp', TEST_OTP],
                'Only one of the security arguments may be given',
            ),
            (
                ['--userPassword', 'pw', '--otp', TEST_OTP],
                'The --userPassword argument requires --authID to be given too.',
            ),
            (
                ['--promptForBindPassword', '--otp', TEST_OTP],
                'The --promptForBindPassword argument requires --bindDN to be given too.',
            ),
            (
                [],
                'No OTP to register',
            ),
            (
                ['--authID', 'u:test.user'],
                'The --otp argument is required unless --deregister is given.',
            ),
        ],
    )
    def test_violations(self, tool, command_line, error):
        with pytest.raises(ArgumentException) as exc_info:
            tool.parse_args(command_line)
        assert error in str(exc_info.value)

    @pytest.mark.parametrize(
        'command_line',
        [
            ['--otp', TEST_OTP],
            ['--deregister'],
            ['--deregister', '--authID', 'u:test.user'],
            ['--authID', 'u:test.user', '--userPassword', 'pw', '--otp', TEST_OTP],
            ['--bindDN', 'cn=admin', '--promptForBindPassword', '--deregister'],
        ],
    )
    def test_valid(self, tool, command_line):
        tool.parse_args(command_line)

    def test_exclusive_set_allows_one(self):
        parser = ArgumentParser('--a :a=True: --b :b=True:')
        parser.add_constraint(ExclusiveArgumentSet('test', ['a', 'b']))
        parser.parse(['--a'])
        parser.validate()
        parser.parse(['--a', '--b'])
        with pytest.raises(ArgumentException):
            parser.validate()

    def test_dependent_set_any_prerequisite(self):
        parser = ArgumentParser('--a :a=True: --b :b=True: --c :c=True:')
        parser.add_constraint(DependentArgumentSet('a', ['b', 'c']))
        parser.parse(['--a', '--c'])
        parser.validate()
        parser.parse(['--a'])
        with pytest.raises(ArgumentException) as exc_info:
            parser.validate()
        assert '--b or --c' in str(exc_info.value)
