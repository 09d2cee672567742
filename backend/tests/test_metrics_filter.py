"""Tests for tag-based filtering of exposition text."""
import pytest

from kuma_metrics_proxy.exceptions import UnknownTag
from kuma_metrics_proxy.services.metrics_filter import filter_metrics


class TestFilterMetrics:
    
    def test_keeps_only_lines_of_tagged_monitors(self, raw_metrics, tag_map):
        result = filter_metrics(raw_metrics, "db", tag_map)
        
        assert result == '# HELP up service up\nup{monitor_name="B",} 1'
    
    def test_keeps_all_members_in_original_order(self, raw_metrics, tag_map):
        assert filter_metrics(raw_metrics, "web", tag_map) == raw_metrics
    
    def test_unknown_tag_fails(self, raw_metrics, tag_map):
        with pytest.raises(UnknownTag) as exc_info:
            filter_metrics(raw_metrics, "cache", tag_map)
        
        assert exc_info.value.tag == "cache"
        assert str(exc_info.value) == 'No matched services for tag "cache"'
    
    def test_unknown_tag_fails_on_empty_map(self, raw_metrics):
        with pytest.raises(UnknownTag):
            filter_metrics(raw_metrics, "web", {})
    
    def test_tag_without_members_keeps_only_meta_lines(self):
        metrics = (
            "# HELP up service up\n"
            "# TYPE up gauge\n"
            'up{monitor_name="A",} 1\n'
            "\n"
            "# HELP latency response time\n"
            'latency{monitor_name="A",} 12'
        )
        result = filter_metrics(metrics, "empty", {"empty": []})
        
        assert result == (
            "# HELP up service up\n"
            "# TYPE up gauge\n"
            "\n"
            "# HELP latency response time"
        )
    
    def test_whitespace_only_lines_are_kept_verbatim(self, tag_map):
        metrics = '  \nup{monitor_name="A",} 1\n\t'
        assert filter_metrics(metrics, "db", tag_map) == "  \n\t"
    
    def test_line_matching_several_members_is_emitted_once(self):
        metrics = 'pair{monitor_name="A",peer="x",monitor_name="B",} 1'
        assert filter_metrics(metrics, "web", {"web": ["A", "B"]}) == metrics
    
    def test_requires_trailing_comma_after_label(self):
        metrics = 'up{monitor_name="A"} 1\nup{monitor_name="AB",} 1'
        assert filter_metrics(metrics, "web", {"web": ["A"]}) == ""
    
    def test_filtering_is_idempotent(self, raw_metrics, tag_map):
        once = filter_metrics(raw_metrics, "db", tag_map)
        assert filter_metrics(once, "db", tag_map) == once
    
    def test_unknown_tag_fails_even_without_samples(self):
        with pytest.raises(UnknownTag):
            filter_metrics("# HELP up service up\n", "missing", {})
    
    def test_unknown_tag_fails_on_empty_text(self, tag_map):
        with pytest.raises(UnknownTag):
            filter_metrics("", "cache", tag_map)
