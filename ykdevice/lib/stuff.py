# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os
import re

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

from ykdevice.lib.exceptions import *

def string_to_type(value, ignore_int=False, ignore_float=False):
    """ Try to find value type and return value as the correct type. """
    # Non-string values need no conversion.
    if not isinstance(value, str):
        return value

    # Check if value is int() before float() because float can match int but
    # not vice versa.
    if not ignore_int:
        try:
            # Prevent a string (e.g. an OTP) from beeing treated as
            # int (e.g. 085624). str(val) must be equal to str(int(val)).
            int_val = int(value)
            if str(int_val) == str(value):
                return int_val
        except ValueError:
            pass
    # Check if value is float().
    if not ignore_float:
        try:
            float_val = float(value)
            if str(float_val) == str(value):
                return float_val
        except ValueError:
            pass

    # Check for "True".
    if value.lower() == "true":
        return True
    # Check for "False".
    if value.lower() == "false":
        return False
    # Check for "None".
    if value.lower() == "none":
        return None

    return value

def conf_to_dict(file_content, parameters=None):
    """ Convert config file content (key=val) to dict. """
    value_quotation = None
    object_config = {}
    para_name = None
    para_values = []
    for line in file_content.split("\n"):
        line = line.rstrip("\r")

        # Collect lines of a quoted multi line value.
        if value_quotation:
            if line.endswith(value_quotation):
                para_values.append(line[:-1])
                value_quotation = None
                if parameters and para_name not in parameters:
                    continue
                object_config[para_name] = "\n".join(para_values)
            else:
                para_values.append(line)
            continue

        # Skip comments.
        if line.strip().startswith("#"):
            continue

        # Skip empty lines.
        if len(line.strip()) == 0:
            continue

        if "=" not in line:
            msg = _("Wrong config file format: {line}")
            msg = msg.format(line=line)
            raise YKDeviceException(msg)

        # Get parameter name and value from config file line.
        para_name, para_val = line.split('=', 1)
        para_name = para_name.strip()
        para_val = para_val.strip()

        # Remove quotation marks.
        quotation_re = re.compile('^(["\'])(.*)$')
        quotation_match = quotation_re.match(para_val)
        if quotation_match:
            quotation = quotation_match.group(1)
            para_val = quotation_match.group(2)
            if not para_val.endswith(quotation):
                value_quotation = quotation
                para_values = [para_val]
                continue
            para_val = para_val[:-1]
            # Quoted values are always strings.
            if parameters and para_name not in parameters:
                continue
            object_config[para_name] = para_val
            continue

        if parameters and para_name not in parameters:
            continue
        object_config[para_name] = string_to_type(para_val)

    if value_quotation:
        msg = _("Missing closing quotation mark for parameter: {para_name}")
        msg = msg.format(para_name=para_name)
        raise YKDeviceException(msg)

    return object_config

def get_exception_message(e):
    """ Get a printable message from an exception. """
    msg = str(e)
    if len(msg) == 0:
        msg = e.__class__.__name__
    return msg
