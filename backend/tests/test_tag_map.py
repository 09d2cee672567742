"""Tests for building the tag mapping."""
from kuma_metrics_proxy.services.tag_map import build_tag_map
from tests.fakes import make_monitor


class TestBuildTagMap:
    
    def test_groups_monitor_names_by_tag(self, monitors):
        assert build_tag_map(monitors) == {"web": ["A", "B"], "db": ["B"]}
    
    def test_empty_input_gives_empty_map(self):
        assert build_tag_map([]) == {}
    
    def test_monitor_without_tags_is_not_mapped(self):
        result = build_tag_map([make_monitor(1, "A"), make_monitor(2, "B", "web")])
        assert result == {"web": ["B"]}
    
    def test_keys_are_exactly_the_tag_names_seen(self):
        monitors = [
            make_monitor(1, "A", "web", "eu"),
            make_monitor(2, "B", "db"),
            make_monitor(3, "C", "eu"),
        ]
        assert set(build_tag_map(monitors)) == {"web", "eu", "db"}
    
    def test_member_order_follows_input_order(self):
        monitors = [
            make_monitor(3, "C", "web"),
            make_monitor(1, "A", "web"),
            make_monitor(2, "B", "web"),
        ]
        assert build_tag_map(monitors)["web"] == ["C", "A", "B"]
    
    def test_same_tag_twice_lists_monitor_twice(self):
        monitors = [make_monitor(1, "A", "web", "web"), make_monitor(2, "B", "web")]
        assert build_tag_map(monitors)["web"] == ["A", "A", "B"]
