# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from sonarlink.config import ServerCredentials
from sonarlink.errors import ConfigurationError, NotFoundError
from sonarlink.http.transport import HttpxTransport
from sonarlink.runtime import SonarLink


def test_sonarlink_wires_token_and_base_url(immediate_transport):
    immediate_transport.routes["https://sq.local/api/system/status"] = (200, b'{"status":"UP"}')
    credentials = ServerCredentials(base_url="https://sq.local", token="tkn")
    with SonarLink(credentials, transport=immediate_transport) as link:
        response = link.get("/api/system/status")
        assert response.body_as_text() == '{"status":"UP"}'
        with pytest.raises(NotFoundError):
            link.get("/api/missing")
        assert link.raw_get("/api/missing").status_code == 404
    assert immediate_transport.closed
    assert immediate_transport.calls[0].request.headers["Authorization"] == "Bearer tkn"


def test_sonarlink_from_env(immediate_transport):
    environ = {"SONARQUBE_CLOUD_TOKEN": "c", "SONARQUBE_CLOUD_ORG": "org"}
    link = SonarLink.from_env(environ, transport=immediate_transport)
    assert link.credentials == ServerCredentials(base_url="https://sonarcloud.io", token="c")
    assert link.api.build_endpoint_url("/api/x") == "https://sonarcloud.io/api/x"


def test_sonarlink_from_env_requires_url():
    with pytest.raises(ConfigurationError):
        SonarLink.from_env({})


def test_sonarlink_builds_default_transport():
    link = SonarLink(ServerCredentials(base_url="https://sq.local"))
    try:
        assert isinstance(link.transport, HttpxTransport)
    finally:
        link.close()
