"""Curated videos and reading material attached to techniques after a plan is built."""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Sequence
from urllib.parse import quote, quote_plus

from hobbypath.api.schemas.resources import CuratedVideo, LearningResource, TechniqueResources
from hobbypath.core.ids import new_id

logger = logging.getLogger(__name__)

MAX_CURATED_VIDEOS = 3

EDUCATIONAL_VIDEOS = [
    {"id": "yQhQBi5XgyM", "channel": "FreeCodeCamp", "duration": "12:34"},
    {"id": "W6NZfCO5SIk", "channel": "Programming with Mosh", "duration": "15:45"},
    {"id": "hdI2bqOjy3c", "channel": "Traversy Media", "duration": "8:20"},
    {"id": "PkZNo7MFNFg", "channel": "The Net Ninja", "duration": "10:15"},
    {"id": "8aGhZQkoFbQ", "channel": "Academind", "duration": "18:30"},
]

HOBBY_ARTICLES: Dict[str, List[Dict[str, object]]] = {
    "Chess": [
        {"title": "{technique} - Chess.com Guide", "url": "https://www.chess.com/learn", "source": "Chess.com",
         "author": "Chess.com Coaches", "rating": 4.8, "recommended": True,
         "description": "Master {technique} with explanations, diagrams, and practice positions."},
        {"title": "{technique} Strategy - Lichess Study", "url": "https://lichess.org/learn", "source": "Lichess",
         "author": "Lichess Community", "rating": 4.7,
         "description": "Interactive lessons and exercises for {technique} with immediate feedback."},
    ],
    "Guitar": [
        {"title": "{technique} - JustinGuitar Lesson", "url": "https://www.justinguitar.com", "source": "JustinGuitar",
         "author": "Justin Sandercoe", "rating": 4.9, "recommended": True,
         "description": "Step-by-step lesson for {technique} with chord diagrams and practice tips."},
        {"title": "{technique} - Ultimate Guitar Guide", "url": "https://www.ultimate-guitar.com",
         "source": "Ultimate Guitar", "author": "UG Community", "rating": 4.4,
         "description": "Tabs, chords, and community tutorials for {technique}."},
    ],
    "Poker": [
        {"title": "{technique} - PokerStrategy Guide", "url": "https://www.pokerstrategy.com",
         "source": "PokerStrategy", "author": "PokerStrategy Coaches", "rating": 4.7, "recommended": True,
         "description": "Strategy guide for {technique} with mathematical analysis."},
        {"title": "{technique} - PokerNews Strategy", "url": "https://www.pokernews.com/strategy",
         "source": "PokerNews", "author": "Poker Professionals", "rating": 4.4,
         "description": "Articles about {technique} from tournament and cash game specialists."},
    ],
}

HOBBY_TOOLS: Dict[str, List[Dict[str, object]]] = {
    "Chess": [
        {"title": "Chess.com Analysis Board", "url": "https://www.chess.com/analysis", "source": "Chess.com",
         "description": "Analyse positions and games with engine support.", "recommended": True},
        {"title": "Chess Tempo Tactics Trainer", "url": "https://chesstempo.com", "source": "Chess Tempo",
         "description": "Rated tactics puzzles that adapt to your level."},
    ],
    "Guitar": [
        {"title": "Guitar Tuner & Metronome", "url": "https://www.fender.com/online-guitar-tuner", "source": "Fender",
         "description": "Free online tuner for standard and alternate tunings.", "recommended": True},
        {"title": "Interactive Fretboard", "url": "https://www.scales-chords.com/fretboard.php",
         "source": "Scales-Chords", "description": "Visualise scales and chords across the neck."},
    ],
    "Poker": [
        {"title": "PokerStove Equity Calculator", "url": "https://www.pokerstove.com", "source": "PokerStove",
         "description": "Calculate hand-versus-range equity.", "recommended": True},
        {"title": "Poker Tracker", "url": "https://www.pokertracker.com", "source": "PokerTracker",
         "description": "Track sessions and review your statistics."},
    ],
}

HOBBY_COURSES: Dict[str, List[Dict[str, object]]] = {
    "Chess": [
        {"title": "Chess.com Complete Course", "url": "https://www.chess.com/lessons", "source": "Chess.com",
         "description": "Structured video lessons from beginner to master.", "recommended": True},
    ],
    "Guitar": [
        {"title": "JustinGuitar Beginner Course", "url": "https://www.justinguitar.com/categories/beginner-guitar-course",
         "source": "JustinGuitar", "description": "Free structured guitar course.", "recommended": True},
    ],
    "Poker": [
        {"title": "Run It Once Training", "url": "https://www.runitonce.com", "source": "Run It Once",
         "description": "Video training from professional players.", "recommended": True},
    ],
}


def curated_videos(
    search_terms: Sequence[str],
    hobby: str,
    level: str,
    id_factory: Callable[[], str] = new_id,
) -> List[CuratedVideo]:
    """Pick up to three tutorial videos for a technique's search keywords; the first is recommended."""
    videos: List[CuratedVideo] = []
    for position, term in enumerate(list(search_terms)[:MAX_CURATED_VIDEOS]):
        video = EDUCATIONAL_VIDEOS[position % len(EDUCATIONAL_VIDEOS)]
        videos.append(
            CuratedVideo(
                id=id_factory(),
                title=f"{term} - {level} Tutorial",
                url=f"https://www.youtube.com/watch?v={video['id']}",
                thumbnail_url=f"https://img.youtube.com/vi/{video['id']}/mqdefault.jpg",
                duration=str(video["duration"]),
                channel_name=str(video["channel"]),
                description=(
                    f"Master {term} in {hobby} with this {level.lower()} tutorial, "
                    f"made for {level.lower()} students who want to improve efficiently."
                ),
                quality=level,
                is_recommended=position == 0,
                video_id=str(video["id"]),
            )
        )
    return videos


def comprehensive_resources(
    technique_title: str,
    hobby: str,
    level: str,
    id_factory: Callable[[], str] = new_id,
) -> TechniqueResources:
    """Collect articles, tools, courses, and tutorials; search links are used if lookup fails."""
    try:
        return TechniqueResources(
            articles=_articles(technique_title, hobby, level, id_factory),
            tools=_catalog_entries(HOBBY_TOOLS, "tool", hobby, level, id_factory)
            or [_search_link("tool", f"{hobby} Learning Tools", "https://www.google.com/search?q=",
                             f"{hobby} learning tools online", "Google", level, id_factory)],
            courses=_catalog_entries(HOBBY_COURSES, "course", hobby, level, id_factory)
            or [_search_link("course", f"{hobby} Structured Learning", "https://www.udemy.com/courses/search/?q=",
                             hobby, "Udemy", level, id_factory)],
            tutorials=_tutorials(technique_title, hobby, level, id_factory),
        )
    except Exception:
        logger.exception("Resource lookup failed for %s / %s; using search links", hobby, technique_title)
        return fallback_resources(technique_title, hobby, level, id_factory)


def fallback_resources(
    technique_title: str,
    hobby: str,
    level: str,
    id_factory: Callable[[], str] = new_id,
) -> TechniqueResources:
    topic = f"{hobby} {technique_title}"
    return TechniqueResources(
        articles=[_search_link("article", f"{hobby}: {technique_title} Guide", "https://www.google.com/search?q=",
                               f"{topic} guide tutorial", "Google", level, id_factory)],
        tools=[_search_link("tool", f"{hobby} Practice Tools", "https://www.google.com/search?q=",
                            f"{hobby} online tools practice", "Google", level, id_factory)],
        courses=[_search_link("course", f"{hobby} Online Courses", "https://www.coursera.org/search?query=",
                              hobby, "Coursera", level, id_factory)],
        tutorials=[_search_link("tutorial", f"{technique_title} Tutorial",
                                "https://www.youtube.com/results?search_query=",
                                f"{topic} tutorial", "YouTube", level, id_factory)],
    )


def _articles(technique_title: str, hobby: str, level: str, id_factory: Callable[[], str]) -> List[LearningResource]:
    articles = [
        LearningResource(
            id=id_factory(),
            type="article",
            title=str(entry["title"]).replace("{technique}", technique_title),
            url=str(entry["url"]),
            description=str(entry["description"]).replace("{technique}", technique_title),
            source=str(entry["source"]),
            difficulty=level,
            author=entry.get("author"),
            rating=entry.get("rating"),
            is_recommended=bool(entry.get("recommended", False)),
        )
        for entry in HOBBY_ARTICLES.get(hobby, [])
    ]
    articles.append(
        LearningResource(
            id=id_factory(),
            type="article",
            title=f"{hobby}: {technique_title} Complete Guide",
            url=f"https://www.wikihow.com/wikiHowTo?search={quote_plus(f'{hobby} {technique_title}')}",
            description=f"Step-by-step guide for {technique_title} in {hobby}, with common mistakes to avoid.",
            source="WikiHow",
            difficulty=level,
            author="WikiHow Experts",
            rating=4.2,
        )
    )
    articles.append(
        LearningResource(
            id=id_factory(),
            type="article",
            title=f"{technique_title} - Reddit {hobby} Community",
            url=f"https://www.reddit.com/r/{quote(hobby.lower().replace(' ', ''))}/search/?q={quote_plus(technique_title)}",
            description=f"Community discussions and tips about {technique_title} from {hobby} enthusiasts.",
            source="Reddit",
            difficulty=level,
            author=f"r/{hobby} Community",
            rating=4.1,
        )
    )
    return articles


def _tutorials(technique_title: str, hobby: str, level: str, id_factory: Callable[[], str]) -> List[LearningResource]:
    return [
        LearningResource(
            id=id_factory(),
            type="tutorial",
            title=f"{technique_title} - Step by Step Tutorial",
            url=f"https://www.instructables.com/howto/{quote(hobby)}",
            description=f"Hands-on project walkthroughs for practising {technique_title}.",
            source="Instructables",
            difficulty=level,
        ),
        _search_link("tutorial", f"{technique_title} Video Walkthrough",
                     "https://www.youtube.com/results?search_query=",
                     f"{hobby} {technique_title} tutorial", "YouTube", level, id_factory),
    ]


def _catalog_entries(
    catalog: Dict[str, List[Dict[str, object]]],
    resource_type: str,
    hobby: str,
    level: str,
    id_factory: Callable[[], str],
) -> List[LearningResource]:
    return [
        LearningResource(
            id=id_factory(),
            type=resource_type,
            title=str(entry["title"]),
            url=str(entry["url"]),
            description=str(entry["description"]),
            source=str(entry["source"]),
            difficulty=level,
            is_recommended=bool(entry.get("recommended", False)),
        )
        for entry in catalog.get(hobby, [])
    ]


def _search_link(
    resource_type: str,
    title: str,
    base_url: str,
    query: str,
    source: str,
    level: str,
    id_factory: Callable[[], str],
) -> LearningResource:
    return LearningResource(
        id=id_factory(),
        type=resource_type,
        title=title,
        url=f"{base_url}{quote_plus(query)}",
        description=f"Search results for {query}.",
        source=source,
        difficulty=level,
    )
