"""
tests.test_navigation
~~~~~~~~~~~~~~~~~~~~~

Watch location building and rewriting.
"""

from multiplayer.navigation import build_watch_url, location_target, room_from_location, strip_room_param

class TestBuildWatchUrl:

    def test_builds_path_and_query(self) -> None:
        assert build_watch_url('X', 5, 'ABC123') == '/watch/X?ep=5&room=ABC123'

    def test_custom_prefix(self) -> None:
        assert build_watch_url('X', 5, 'ABC123', prefix='/tv/') == '/tv/X?ep=5&room=ABC123'

class TestLocationTarget:

    def test_absolute_url(self) -> None:
        assert location_target('https://site.example/watch/X?ep=5&room=R#t') == '/watch/X?ep=5&room=R'

    def test_relative_without_query(self) -> None:
        assert location_target('/watch/X') == '/watch/X'

    def test_empty(self) -> None:
        assert location_target('') == '/'

class TestStripRoomParam:

    def test_removes_only_room(self) -> None:
        assert strip_room_param('/watch/X?ep=5&room=ABC123') == '/watch/X?ep=5'

    def test_keeps_scheme_host_and_fragment(self) -> None:
        stripped = strip_room_param('https://site.example/watch/X?room=R&ep=5#player')

        assert stripped == 'https://site.example/watch/X?ep=5#player'

    def test_no_room_is_unchanged(self) -> None:
        assert strip_room_param('/watch/X?ep=5') == '/watch/X?ep=5'

class TestRoomFromLocation:

    def test_reads_room(self) -> None:
        assert room_from_location('/watch/X?ep=5&room=ABC123') == 'ABC123'

    def test_missing_room(self) -> None:
        assert room_from_location('/watch/X?ep=5') is None
