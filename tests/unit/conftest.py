# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from fakes import RESPONSE, Recorder


@pytest.fixture
def vendor():
    async def request_adapter(request):
        return RESPONSE

    def response_adapter(res):
        return res["data"]

    def error_adapter(exc):
        raise exc.data

    class Vendor:
        request = Recorder(request_adapter)
        response = Recorder(response_adapter)
        error = Recorder(error_adapter)

    return Vendor
