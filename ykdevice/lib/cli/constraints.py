# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

from ykdevice.lib.exceptions import *

def get_identifier(parser, var_name):
    argument = parser.get_argument(var_name)
    if argument is None:
        return var_name
    return argument.identifier

class ExclusiveArgumentSet(object):
    """ At most one argument of the set may be given. """
    def __init__(self, name, var_names):
        self.name = name
        self.var_names = list(var_names)

    def check(self, parser):
        present = []
        for x in self.var_names:
            if not parser.is_present(x):
                continue
            present.append(get_identifier(parser, x))
        if len(present) < 2:
            return
        msg = _("Only one of the {group} arguments may be given: {arguments}")
        msg = msg.format(group=self.name, arguments=", ".join(present))
        raise ArgumentException(msg)

class DependentArgumentSet(object):
    """ If the argument is given, one of its prerequisites must be given too. """
    def __init__(self, var_name, prerequisites):
        self.var_name = var_name
        self.prerequisites = list(prerequisites)

    def check(self, parser):
        if not parser.is_present(self.var_name):
            return
        for x in self.prerequisites:
            if parser.is_present(x):
                return
        prerequisites = []
        for x in self.prerequisites:
            prerequisites.append(get_identifier(parser, x))
        msg = _("The {argument} argument requires {prerequisites} to be given too.")
        msg = msg.format(argument=get_identifier(parser, self.var_name),
                        prerequisites=" or ".join(prerequisites))
        raise ArgumentException(msg)

def get_constraints(help_dict):
    """ Build constraints declared in a command help dict. """
    constraints = []
    try:
        exclusive_args = help_dict['_exclusive_args']
    except KeyError:
        exclusive_args = []
    for name, var_names in exclusive_args:
        constraints.append(ExclusiveArgumentSet(name, var_names))
    try:
        dependent_args = help_dict['_dependent_args']
    except KeyError:
        dependent_args = []
    for var_name, prerequisites in dependent_args:
        constraints.append(DependentArgumentSet(var_name, prerequisites))
    return constraints
