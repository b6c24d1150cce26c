# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
"""Tests for coded enumerations."""

import pytest

from ykdevice.lib.named_enum import check_dense_codes
from ykdevice.lib.named_enum import get_name_variants
from ykdevice.lib.ldap.enums import DeviceOperation
from ykdevice.lib.ldap.enums import BackendLockBehavior
from ykdevice.lib.ldap.enums import NotificationDestinationChangeType
from ykdevice.lib.ldap.result_code import ResultCode
from ykdevice.lib.exceptions import UnknownConstant
from ykdevice.lib.exceptions import YKDeviceException

ALL_ENUMS = [
        DeviceOperation,
        NotificationDestinationChangeType,
        BackendLockBehavior,
        ResultCode,
        ]

ALL_MEMBERS = [member for enum_class in ALL_ENUMS for member in enum_class]


class TestNameVariants:
    """Tests for get_name_variants."""

    def test_multi_word_name(self):
        variants = get_name_variants("DO_NOT_ACQUIRE")
        assert variants == {
                "DO_NOT_ACQUIRE",
                "do_not_acquire",
                "DO-NOT-ACQUIRE",
                "do-not-acquire",
                "DONOTACQUIRE",
                "donotacquire",
                }

    def test_single_word_name(self):
        assert get_name_variants("REPLACE") == {"REPLACE", "replace"}


class TestLookup:
    """Tests for by_code, by_name and for_name."""

    @pytest.mark.parametrize('member', ALL_MEMBERS, ids=str)
    def test_by_code(self, member):
        assert type(member).by_code(member.code) is member

    @pytest.mark.parametrize('member', ALL_MEMBERS, ids=str)
    def test_by_name(self, member):
        assert type(member).by_name(member.name) is member

    @pytest.mark.parametrize('member', ALL_MEMBERS, ids=str)
    def test_for_name_accepts_every_variant(self, member):
        for name in member.names():
            assert type(member).for_name(name) is member

    def test_flexible_spellings(self):
        behavior = BackendLockBehavior.ACQUIRE_AFTER_RETRIES
        assert BackendLockBehavior.for_name("acquire-after-retries") is behavior
        assert BackendLockBehavior.for_name("acquireafterretries") is behavior
        assert BackendLockBehavior.for_name("ACQUIRE-AFTER-RETRIES") is behavior

    def test_name_map_is_built_once(self):
        name_map = BackendLockBehavior.get_name_map()
        assert name_map['do-not-acquire'] is BackendLockBehavior.DO_NOT_ACQUIRE
        assert BackendLockBehavior.get_name_map() is name_map
        assert NotificationDestinationChangeType.get_name_map() is not name_map

    def test_codes(self):
        assert NotificationDestinationChangeType.REPLACE.code == 0
        assert NotificationDestinationChangeType.ADD.code == 1
        assert NotificationDestinationChangeType.DELETE.code == 2
        assert BackendLockBehavior.DO_NOT_ACQUIRE.code == 0
        assert BackendLockBehavior.ACQUIRE_BEFORE_INITIAL_ATTEMPT.code == 3

    def test_unknown_code(self):
        assert NotificationDestinationChangeType.by_code(3) is None
        assert BackendLockBehavior.by_code(12345) is None
        assert ResultCode.by_code(1000) is None

    def test_unknown_code_strict(self):
        with pytest.raises(UnknownConstant):
            BackendLockBehavior.by_code(12345, strict=True)

    def test_unknown_name(self):
        assert BackendLockBehavior.by_name("undefined") is None
        assert BackendLockBehavior.for_name("some undefined name") is None
        # by_name wants the exact name.
        assert BackendLockBehavior.by_name("do-not-acquire") is None

    def test_unknown_name_strict(self):
        with pytest.raises(UnknownConstant):
            NotificationDestinationChangeType.by_name("undefined", strict=True)

    def test_str_is_name(self):
        assert str(DeviceOperation.DEREGISTER_ALL) == "DEREGISTER_ALL"


class TestDenseCodes:
    """Tests for check_dense_codes."""

    @pytest.mark.parametrize(
        'enum_class',
        [DeviceOperation, NotificationDestinationChangeType, BackendLockBehavior],
    )
    def test_dense(self, enum_class):
        assert check_dense_codes(enum_class) is True

    def test_result_codes_are_sparse(self):
        with pytest.raises(YKDeviceException):
            check_dense_codes(ResultCode)
