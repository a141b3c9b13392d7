"""Tests for curated videos and learning resources."""
from __future__ import annotations

from hobbypath.services import resource_catalog
from hobbypath.services.resource_catalog import comprehensive_resources, curated_videos


def test_curated_videos_cap_and_recommend_first() -> None:
    videos = curated_videos(["a", "b", "c", "d"], "Chess", "Beginner")

    assert len(videos) == 3
    assert [video.is_recommended for video in videos] == [True, False, False]
    assert videos[0].title == "a - Beginner Tutorial"
    assert videos[0].url.startswith("https://www.youtube.com/watch?v=")
    assert videos[0].quality == "Beginner"


def test_no_keywords_means_no_videos() -> None:
    assert curated_videos([], "Chess", "Beginner") == []


def test_known_hobby_uses_catalog_entries() -> None:
    resources = comprehensive_resources("Forks and Pins", "Chess", "Intermediate")

    assert resources.articles[0].title == "Forks and Pins - Chess.com Guide"
    assert {resource.source for resource in resources.articles} >= {"Chess.com", "WikiHow", "Reddit"}
    assert resources.tools[0].source == "Chess.com"
    assert resources.courses[0].is_recommended is True
    assert all(resource.difficulty == "Intermediate" for resource in resources.flattened())


def test_unknown_hobby_gets_search_links() -> None:
    resources = comprehensive_resources("Centering Clay", "Pottery", "Beginner")

    assert resources.tools[0].url.startswith("https://www.google.com/search?q=")
    assert resources.courses[0].source == "Udemy"
    assert [resource.type for resource in resources.tutorials] == ["tutorial", "tutorial"]
    assert "Pottery+Centering+Clay" in resources.tutorials[1].url


def test_lookup_failure_falls_back_to_search_links(monkeypatch) -> None:
    def broken(*args, **kwargs):
        raise KeyError("catalog")

    monkeypatch.setattr(resource_catalog, "_articles", broken)

    resources = comprehensive_resources("Scales", "Guitar", "Advanced")

    assert [resource.source for resource in resources.flattened()] == ["Google", "YouTube", "Google", "Coursera"]
