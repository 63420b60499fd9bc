import pytest

from yewchat.routes import Route, User, path_for_route, route_for_path


@pytest.mark.parametrize(
    "path, route",
    [("/", Route.LOGIN), ("/chat", Route.CHAT), ("/404", Route.NOT_FOUND)],
)
def test_known_paths(path, route):
    assert route_for_path(path) is route


def test_unknown_path_is_not_found():
    assert route_for_path("/elsewhere") is Route.NOT_FOUND


@pytest.mark.parametrize("route", list(Route))
def test_round_trip(route):
    assert route_for_path(path_for_route(route)) is route


def test_trailing_slash_and_query_are_ignored():
    assert route_for_path("/chat/") is Route.CHAT
    assert route_for_path("/chat?room=1#end") is Route.CHAT


def test_empty_path_is_login():
    assert route_for_path("") is Route.LOGIN


def test_path_for_route_values():
    assert path_for_route(Route.CHAT) == "/chat"
    assert path_for_route(Route.LOGIN) == "/"


def test_path_for_invalid_route_raises():
    with pytest.raises(ValueError):
        path_for_route("not-a-route")


def test_user_default_and_mutation():
    user = User()
    assert user.username == "initial"
    user.username = "alice"
    assert user == User("alice")