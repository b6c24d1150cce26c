# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import pytest

import ykdevice.lib
from ykdevice.lib.ykdevice_config import YKDeviceConfig

# A well-formed YubiKey OTP (12 chars public ID + 32 chars token).
TEST_OTP = "ccccccbcgujhingjrdejhgfnuetrgigvejhhgbkugded"

SUCCESS_RESULT = {
            'result'        : 0,
            'description'   : 'success',
            'message'       : '',
            'dn'            : '',
            'referrals'     : None,
            'responseName'  : None,
            'responseValue' : None,
            }

@pytest.fixture(autouse=True)
def config(tmp_path):
    """Fresh global config that does not touch /etc or syslog."""
    old_config = ykdevice.lib.config
    test_config = YKDeviceConfig(auto_load=False)
    test_config.config_file = str(tmp_path / "ykdevice.conf")
    test_config.setup_locale("en")
    yield test_config
    ykdevice.lib.config = old_config

@pytest.fixture
def conn(mocker):
    """ldap3 connection whose extended operations succeed."""
    conn = mocker.MagicMock()
    conn.result = dict(SUCCESS_RESULT)
    return conn
