# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
"""
Password sources.

A password comes from exactly one source: the command line, the first line
of a file or an interactive prompt. NoPassword is used when no password is
needed (e.g. deregistering all devices of a user).
"""
import os

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

from ykdevice.lib import stuff

from ykdevice.lib.exceptions import *

class PasswordSource(object):
    def read(self):
        """ Get password as UTF-8 encoded bytes. """
        raise NotImplementedError()

class NoPassword(PasswordSource):
    def read(self):
        return None

    def __repr__(self):
        return "<NoPassword>"

class InlinePassword(PasswordSource):
    def __init__(self, value):
        self._value = value

    def read(self):
        try:
            return self._value.encode("utf-8")
        except UnicodeEncodeError:
            msg = _("Password is not valid UTF-8.")
            raise PasswordReadError(msg)

    def __repr__(self):
        return "<InlinePassword>"

class PasswordFile(PasswordSource):
    def __init__(self, path):
        self.path = path

    def read(self):
        try:
            with open(self.path, "r", encoding="utf-8") as fd:
                password = fd.readline()
        except (OSError, UnicodeDecodeError) as e:
            msg = _("Unable to read password file: {path}: {e}")
            msg = msg.format(path=self.path, e=e)
            raise PasswordReadError(msg)
        # Remove line terminator.
        if password.endswith("\n"):
            password = password[:-1]
        if password.endswith("\r"):
            password = password[:-1]
        if len(password) == 0:
            msg = _("Password file is empty: {path}")
            msg = msg.format(path=self.path)
            raise PasswordReadError(msg)
        return password.encode("utf-8")

    def __repr__(self):
        return f"<PasswordFile {self.path}>"

class PasswordPrompt(PasswordSource):
    def __init__(self, account, prompt=None):
        self.account = account
        if prompt is None:
            prompt = _("Enter the static password for user {account}: ")
        self.prompt = prompt.format(account=account)

    def read(self):
        from ykdevice.lib import cli
        try:
            password = cli.read_pass(prompt=self.prompt)
        except (EOFError, OSError) as e:
            msg = _("Unable to read password for {account}: {e}")
            msg = msg.format(account=self.account, e=stuff.get_exception_message(e))
            raise PasswordReadError(msg)
        try:
            return password.encode("utf-8")
        except UnicodeEncodeError:
            msg = _("Password is not valid UTF-8.")
            raise PasswordReadError(msg)

    def __repr__(self):
        return f"<PasswordPrompt {self.account}>"

def get_password_source(password=None, password_file=None,
    prompt=False, account=None, prompt_text=None):
    """ Map (validated) password arguments to a password source. """
    if password is not None:
        return InlinePassword(password)
    if password_file is not None:
        return PasswordFile(password_file)
    if prompt:
        return PasswordPrompt(account, prompt=prompt_text)
    return NoPassword()
