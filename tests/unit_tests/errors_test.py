# -*- coding: utf-8 -*-

from pledge.errors import Rejection, rejection_value


class TestErrors(object):

    def test_rejection_carries_any_value(self):
        err = Rejection({'code': 4})
        assert err.value == {'code': 4}
        assert str(err) == "{'code': 4}"

    def test_rejection_value(self):
        """Rejection are unwrapped; other exceptions are kept as is."""
        error = KeyError('k')
        assert rejection_value(Rejection(20)) == 20
        assert rejection_value(error) is error
