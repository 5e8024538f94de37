# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from sonarlink.serverapi.url import concat


@pytest.mark.parametrize("base", ["https://x", "https://x/"])
@pytest.mark.parametrize("relative", ["api/foo", "/api/foo"])
def test_concat_places_exactly_one_slash_at_junction(base, relative):
    assert concat(base, relative) == "https://x/api/foo"


def test_concat_keeps_interior_slashes():
    assert concat("https://x/sonar//ctx", "/api//foo/") == "https://x/sonar//ctx/api//foo/"


def test_concat_strips_only_one_leading_slash():
    assert concat("https://x/", "//api") == "https://x//api"


def test_concat_with_joined_base_keeps_segment_count():
    once = concat("https://x/base", "/api/foo")
    twice = concat(once, "")
    assert [s for s in twice.split("/") if s] == [s for s in once.split("/") if s]
    assert concat(twice, "/") == twice
