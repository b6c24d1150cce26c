# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
"""
Enumerations of named constants with integer codes.

Members of a CodedEnum are looked up by their code, by their exact name or
by a flexible spelling of their name as typed by a user on the command line
(e.g. "acquire-after-retries" for ACQUIRE_AFTER_RETRIES).
"""
import os
import enum

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

from ykdevice.lib.exceptions import *

def get_name_variants(name):
    """
    Get all accepted spellings of the given name.

    Each separator variant (as-is, dashes, underscores, no separators)
    is accepted as-is, upper case and lower case.
    """
    separator_variants = [
                        name,
                        name.replace("_", "-"),
                        name.replace("-", "_"),
                        name.replace("_", "").replace("-", ""),
                        ]
    variants = set()
    for x in separator_variants:
        variants.add(x)
        variants.add(x.upper())
        variants.add(x.lower())
    return frozenset(variants)

class CodedEnum(enum.Enum):
    """ Enum base class whose member values are integer codes. """
    def __init__(self, *args):
        # Build the set of accepted names once, at class creation.
        self._accepted_names = get_name_variants(self.name)

    def __str__(self):
        return self.name

    @property
    def code(self):
        return self.value

    def names(self):
        """ Return all accepted spellings of this members name. """
        return self._accepted_names

    @classmethod
    def by_code(cls, code, strict=False):
        """ Get member by integer code. """
        for member in cls:
            if member.code == code:
                return member
        if not strict:
            return None
        msg = _("Unknown {enum_name} code: {code}")
        msg = msg.format(enum_name=cls.__name__, code=code)
        raise UnknownConstant(msg)

    @classmethod
    def by_name(cls, name, strict=False):
        """ Get member by its exact name. """
        try:
            return cls.__members__[name]
        except KeyError:
            pass
        if not strict:
            return None
        msg = _("Unknown {enum_name} name: {name}")
        msg = msg.format(enum_name=cls.__name__, name=name)
        raise UnknownConstant(msg)

    @classmethod
    def get_name_map(cls):
        """ Get mapping of every accepted spelling to its member. """
        try:
            return cls.__dict__['_name_map']
        except KeyError:
            pass
        name_map = {}
        for member in cls:
            for name in member.names():
                name_map[name] = member
        cls._name_map = name_map
        return name_map

    @classmethod
    def for_name(cls, name):
        """ Get member by any accepted spelling of its name. """
        return cls.get_name_map().get(name)

def check_dense_codes(enum_class):
    """ Make sure member codes are unique and assigned from 0 without gaps. """
    codes = [x.code for x in enum_class]
    if sorted(codes) == list(range(len(codes))):
        return True
    msg = _("Codes of {enum_name} are not dense: {codes}")
    msg = msg.format(enum_name=enum_class.__name__, codes=codes)
    raise YKDeviceException(msg)
