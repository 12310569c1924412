# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Test doubles shared by the client and pipeline tests."""


class TransportFailure(Exception):
    """Raised by fake request adapters; carries the payload an error adapter unwraps."""

    def __init__(self, data):
        super().__init__("transport failure")
        self.data = data


class ApiProblem(Exception):
    def __init__(self, payload):
        super().__init__(payload)
        self.payload = payload


class Recorder:
    """Callable that records its arguments and delegates to a replaceable behaviour."""

    def __init__(self, behaviour):
        self.behaviour = behaviour
        self.calls = []
        self._once = []

    def once(self, behaviour):
        self._once.append(behaviour)

    def __call__(self, *args):
        self.calls.append(args)
        behaviour = self._once.pop(0) if self._once else self.behaviour
        return behaviour(*args)

    @property
    def called(self):
        return bool(self.calls)


RESPONSE = {"status": 200, "data": {"lol": "ok"}}
