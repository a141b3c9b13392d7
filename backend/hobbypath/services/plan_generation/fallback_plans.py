"""Authored curricula used whenever model-backed generation fails."""
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from hobbypath.api.schemas.learning_plan import SKILL_LEVELS, LearningPlan, Technique
from hobbypath.core.ids import new_id

logger = logging.getLogger(__name__)

DEFAULT_LEVEL = "Beginner"
DEFAULT_HOBBY = "New Hobby"
PLACEHOLDER_PATTERN = re.compile(r"\{(hobby|level)\}")

FALLBACK_LIBRARY: Dict[str, Dict[str, List[Dict[str, Any]]]] = {
    "Chess": {
        "Beginner": [
            {
                "title": "How Each Piece Moves",
                "description": "Learn the movement and capture rules for every piece, including pawn promotion.",
                "time": "30 mins",
                "difficulty": "Easy",
                "prerequisites": "None",
                "hints": "Set up a board and move each piece across empty squares. Quiz yourself on legal moves.",
                "keywords": ["chess piece movement", "chess rules for beginners"],
            },
            {
                "title": "Special Moves: Castling and En Passant",
                "description": "Understand when castling is legal, how en passant works, and why they matter.",
                "time": "25 mins",
                "difficulty": "Easy",
                "prerequisites": "How each piece moves",
                "hints": "Set up positions where castling is and is not allowed. Replay an en passant capture.",
                "keywords": ["chess castling rules", "en passant explained"],
            },
            {
                "title": "Opening Principles",
                "description": "Control the center, develop knights and bishops early, and castle for king safety.",
                "time": "40 mins",
                "difficulty": "Easy",
                "prerequisites": "Special moves",
                "hints": "Play ten openings that follow the principles. Avoid moving the same piece twice early.",
                "keywords": ["chess opening principles", "control the center chess"],
            },
            {
                "title": "Basic Tactics: Forks and Pins",
                "description": "Spot double attacks and pinned pieces to win material.",
                "time": "45 mins",
                "difficulty": "Medium",
                "prerequisites": "Opening principles",
                "hints": "Solve 15 fork and pin puzzles a day. Say the tactic out loud before moving.",
                "keywords": ["chess forks and pins", "beginner chess tactics"],
            },
            {
                "title": "Checkmate Patterns",
                "description": "Deliver back-rank, queen-and-king, and rook-and-king checkmates.",
                "time": "45 mins",
                "difficulty": "Medium",
                "prerequisites": "Basic tactics",
                "hints": "Practice king-and-queen mate against a friend or engine until it takes under a minute.",
                "keywords": ["basic checkmate patterns", "back rank mate"],
            },
        ],
        "Intermediate": [
            {
                "title": "Building an Opening Repertoire",
                "description": "Choose one opening as White and one defence per first move as Black, and learn their plans.",
                "time": "45 mins",
                "difficulty": "Medium",
                "prerequisites": "Opening principles",
                "hints": "Study model games instead of memorising long lines. Note the typical pawn structures.",
                "keywords": ["chess opening repertoire", "intermediate chess openings"],
            },
            {
                "title": "Combination Calculation",
                "description": "Calculate forcing sequences of checks, captures, and threats three to four moves deep.",
                "time": "50 mins",
                "difficulty": "Medium",
                "prerequisites": "Basic tactics",
                "hints": "Solve puzzles without moving pieces. Write down the full line before checking.",
                "keywords": ["chess calculation training", "chess combinations"],
            },
            {
                "title": "Pawn Structure Fundamentals",
                "description": "Recognise isolated, doubled, and passed pawns and plan around them.",
                "time": "45 mins",
                "difficulty": "Medium",
                "prerequisites": "Building an opening repertoire",
                "hints": "Annotate two master games focusing only on pawn moves.",
                "keywords": ["chess pawn structure", "isolated pawn strategy"],
            },
            {
                "title": "Rook Endgames",
                "description": "Master the Lucena and Philidor positions and active rook play.",
                "time": "55 mins",
                "difficulty": "Hard",
                "prerequisites": "Pawn structure fundamentals",
                "hints": "Play out Lucena and Philidor against an engine from both sides.",
                "keywords": ["lucena position", "philidor position rook endgame"],
            },
            {
                "title": "Reviewing Your Own Games",
                "description": "Find the turning points of your games and turn mistakes into study topics.",
                "time": "40 mins",
                "difficulty": "Medium",
                "prerequisites": "Combination calculation",
                "hints": "Analyse without an engine first, then compare. Keep a log of recurring errors.",
                "keywords": ["how to analyze chess games", "chess game review"],
            },
        ],
        "Advanced": [
            {
                "title": "Deep Opening Preparation",
                "description": "Prepare critical lines and novelties against specific opponents' repertoires.",
                "time": "75 mins",
                "difficulty": "Hard",
                "prerequisites": "An established opening repertoire",
                "hints": "Build a prep file per opening. Test lines in training games before using them.",
                "keywords": ["advanced chess opening preparation", "chess novelty preparation"],
            },
            {
                "title": "Prophylactic Thinking",
                "description": "Ask what the opponent wants every move and stop their plan before your own.",
                "time": "60 mins",
                "difficulty": "Hard",
                "prerequisites": "Deep opening preparation",
                "hints": "Study Petrosian and Karpov games. Predict the opponent's plan before each move.",
                "keywords": ["chess prophylaxis", "prophylactic thinking chess"],
            },
            {
                "title": "Complex Endgame Technique",
                "description": "Convert minor-piece and opposite-colour bishop endgames with precise technique.",
                "time": "80 mins",
                "difficulty": "Hard",
                "prerequisites": "Rook endgames",
                "hints": "Work through a classic endgame manual and replay each position against an engine.",
                "keywords": ["advanced chess endgames", "bishop endgame technique"],
            },
            {
                "title": "Positional Sacrifices",
                "description": "Give material for long-term compensation such as initiative, structure, or king safety.",
                "time": "70 mins",
                "difficulty": "Hard",
                "prerequisites": "Prophylactic thinking",
                "hints": "Collect exchange-sacrifice games and explain the compensation in your own words.",
                "keywords": ["positional sacrifice chess", "exchange sacrifice"],
            },
            {
                "title": "Tournament Time Management",
                "description": "Budget the clock across opening, middlegame, and endgame under tournament controls.",
                "time": "45 mins",
                "difficulty": "Medium",
                "prerequisites": "Complex endgame technique",
                "hints": "Record your clock every ten moves in training games and review the spend.",
                "keywords": ["chess time management", "tournament chess clock strategy"],
            },
        ],
    },
    "Poker": {
        "Beginner": [
            {
                "title": "Hand Rankings",
                "description": "Memorise the order of poker hands from high card to royal flush.",
                "time": "20 mins",
                "difficulty": "Easy",
                "prerequisites": "None",
                "hints": "Deal five random cards and name the hand as fast as you can.",
                "keywords": ["poker hand rankings", "poker hands for beginners"],
            },
            {
                "title": "Texas Hold'em Betting Rounds",
                "description": "Follow blinds, pre-flop, flop, turn, and river action in order.",
                "time": "30 mins",
                "difficulty": "Easy",
                "prerequisites": "Hand rankings",
                "hints": "Deal practice hands and say each betting round out loud.",
                "keywords": ["texas holdem rules", "poker betting rounds"],
            },
            {
                "title": "Starting Hand Selection",
                "description": "Play strong starting hands and fold the rest, adjusting by position.",
                "time": "35 mins",
                "difficulty": "Easy",
                "prerequisites": "Betting rounds",
                "hints": "Print a starting hand chart and follow it for a week of play money games.",
                "keywords": ["poker starting hands chart", "preflop hand selection"],
            },
            {
                "title": "Position Awareness",
                "description": "Understand why acting last is an advantage and widen your range on the button.",
                "time": "35 mins",
                "difficulty": "Medium",
                "prerequisites": "Starting hand selection",
                "hints": "Note your seat on every hand and compare results from early and late position.",
                "keywords": ["poker position explained", "button play poker"],
            },
            {
                "title": "Pot Odds Basics",
                "description": "Compare the price of a call to your chance of completing a draw.",
                "time": "45 mins",
                "difficulty": "Medium",
                "prerequisites": "Position awareness",
                "hints": "Use the rule of 2 and 4 on every drawing hand you see.",
                "keywords": ["poker pot odds", "rule of 2 and 4 poker"],
            },
        ],
        "Intermediate": [
            {
                "title": "Hand Range Thinking",
                "description": "Put opponents on ranges of hands rather than a single holding.",
                "time": "50 mins",
                "difficulty": "Medium",
                "prerequisites": "Starting hand selection",
                "hints": "After each hand write the range you assigned and check it at showdown.",
                "keywords": ["poker hand ranges", "range thinking poker"],
            },
            {
                "title": "Continuation Betting",
                "description": "Choose when to follow up a pre-flop raise on the flop based on board texture.",
                "time": "45 mins",
                "difficulty": "Medium",
                "prerequisites": "Hand range thinking",
                "hints": "Sort flops into dry and wet boards and plan your c-bet frequency for each.",
                "keywords": ["continuation bet strategy", "c-bet board texture"],
            },
            {
                "title": "Implied Odds and Expected Value",
                "description": "Account for future bets when calling with draws and compute simple EV.",
                "time": "55 mins",
                "difficulty": "Hard",
                "prerequisites": "Pot odds basics",
                "hints": "Work three EV calculations by hand each session before checking with a calculator.",
                "keywords": ["poker implied odds", "expected value poker"],
            },
            {
                "title": "Bluffing and Semi-Bluffing",
                "description": "Bluff with hands that have equity and pick believable bluffing spots.",
                "time": "45 mins",
                "difficulty": "Medium",
                "prerequisites": "Continuation betting",
                "hints": "Review every bluff you make and ask whether your story was consistent.",
                "keywords": ["semi bluff poker", "when to bluff poker"],
            },
            {
                "title": "Bankroll Management",
                "description": "Choose stakes your bankroll can sustain through normal variance.",
                "time": "30 mins",
                "difficulty": "Easy",
                "prerequisites": "None",
                "hints": "Track every session and move down in stakes when you drop below your buy-in rule.",
                "keywords": ["poker bankroll management", "poker variance"],
            },
        ],
        "Advanced": [
            {
                "title": "Game Theory Optimal Foundations",
                "description": "Understand balanced ranges, minimum defence frequency, and indifference.",
                "time": "80 mins",
                "difficulty": "Hard",
                "prerequisites": "Hand range thinking",
                "hints": "Study one solver output per day and explain the strategy in plain words.",
                "keywords": ["GTO poker basics", "minimum defense frequency"],
            },
            {
                "title": "Exploitative Adjustments",
                "description": "Deviate from balanced play to punish specific opponent leaks.",
                "time": "70 mins",
                "difficulty": "Hard",
                "prerequisites": "Game theory optimal foundations",
                "hints": "Label player types in your notes and pre-plan one adjustment for each.",
                "keywords": ["exploitative poker strategy", "poker player types"],
            },
            {
                "title": "Multi-Street Bet Sizing",
                "description": "Plan geometric sizing and polarised bets across turn and river.",
                "time": "75 mins",
                "difficulty": "Hard",
                "prerequisites": "Exploitative adjustments",
                "hints": "Pick a sizing plan before the flop in review hands and check it against results.",
                "keywords": ["poker bet sizing strategy", "polarized betting poker"],
            },
            {
                "title": "Tournament ICM Decisions",
                "description": "Adjust push-fold and calling ranges for payout pressure near the bubble.",
                "time": "60 mins",
                "difficulty": "Hard",
                "prerequisites": "Game theory optimal foundations",
                "hints": "Run bubble spots through an ICM calculator and compare with your instincts.",
                "keywords": ["ICM poker tournament", "bubble strategy poker"],
            },
            {
                "title": "Mental Game and Tilt Control",
                "description": "Recognise tilt triggers and keep decision quality steady over long sessions.",
                "time": "45 mins",
                "difficulty": "Medium",
                "prerequisites": "None",
                "hints": "Write a short pre-session routine and stop playing when two tilt signs appear.",
                "keywords": ["poker tilt control", "poker mental game"],
            },
        ],
    },
    "Guitar": {
        "Beginner": [
            {
                "title": "Tuning and Holding the Guitar",
                "description": "Tune to standard EADGBE and hold the guitar and pick comfortably.",
                "time": "20 mins",
                "difficulty": "Easy",
                "prerequisites": "None",
                "hints": "Tune by ear against a reference every session before using a tuner.",
                "keywords": ["how to tune a guitar", "guitar posture beginner"],
            },
            {
                "title": "Open Chords: E, A, D",
                "description": "Fret clean E major, A major, and D major chords with every string ringing.",
                "time": "35 mins",
                "difficulty": "Easy",
                "prerequisites": "Tuning and holding the guitar",
                "hints": "Strum each chord slowly and pick string by string to find muted notes.",
                "keywords": ["beginner open chords guitar", "E A D chords"],
            },
            {
                "title": "Chord Changes",
                "description": "Switch between open chords in time without stopping the strum.",
                "time": "40 mins",
                "difficulty": "Medium",
                "prerequisites": "Open chords",
                "hints": "Count how many clean changes you make in one minute and try to beat it daily.",
                "keywords": ["one minute chord changes", "guitar chord transitions"],
            },
            {
                "title": "Basic Strumming Patterns",
                "description": "Keep a steady down-up strum and play a common eighth-note pattern.",
                "time": "30 mins",
                "difficulty": "Easy",
                "prerequisites": "Chord changes",
                "hints": "Use a metronome at 60 BPM and keep your hand moving even on missed strums.",
                "keywords": ["basic guitar strumming patterns", "down up strumming"],
            },
            {
                "title": "Your First Song",
                "description": "Put chords and strumming together to play a simple three-chord song.",
                "time": "45 mins",
                "difficulty": "Medium",
                "prerequisites": "Basic strumming patterns",
                "hints": "Play along with the recording and record yourself once a week.",
                "keywords": ["easy three chord songs guitar", "first song on guitar"],
            },
        ],
        "Intermediate": [
            {
                "title": "Barre Chords",
                "description": "Play E-shape and A-shape barre chords anywhere on the neck.",
                "time": "45 mins",
                "difficulty": "Medium",
                "prerequisites": "Clean open chords",
                "hints": "Build strength with short holds and check each string rings before moving on.",
                "keywords": ["barre chords for beginners", "F barre chord tips"],
            },
            {
                "title": "Minor Pentatonic Scale",
                "description": "Learn the first pentatonic box shape and use it to improvise.",
                "time": "40 mins",
                "difficulty": "Medium",
                "prerequisites": "Barre chords",
                "hints": "Play the box up and down with alternate picking, then improvise over a backing track.",
                "keywords": ["minor pentatonic scale guitar", "pentatonic box 1"],
            },
            {
                "title": "Hammer-ons, Pull-offs, and Slides",
                "description": "Add legato techniques to make phrases smoother.",
                "time": "35 mins",
                "difficulty": "Medium",
                "prerequisites": "Minor pentatonic scale",
                "hints": "Practice each technique in isolation, then work them into pentatonic licks.",
                "keywords": ["hammer on pull off guitar", "guitar slides technique"],
            },
            {
                "title": "String Bending and Vibrato",
                "description": "Bend strings in tune and add controlled vibrato to sustained notes.",
                "time": "45 mins",
                "difficulty": "Hard",
                "prerequisites": "Hammer-ons, pull-offs, and slides",
                "hints": "Fret the target note first, then bend to match it.",
                "keywords": ["guitar string bending in tune", "guitar vibrato technique"],
            },
            {
                "title": "Rhythm Guitar Syncopation",
                "description": "Play syncopated and muted strumming patterns for funk and rock grooves.",
                "time": "40 mins",
                "difficulty": "Medium",
                "prerequisites": "Barre chords",
                "hints": "Mute with the fretting hand and keep strumming sixteenths with a metronome.",
                "keywords": ["syncopated strumming", "rhythm guitar muting"],
            },
        ],
        "Advanced": [
            {
                "title": "CAGED System",
                "description": "Connect the five chord shapes to navigate the whole fretboard.",
                "time": "60 mins",
                "difficulty": "Hard",
                "prerequisites": "Barre chords and pentatonic scale",
                "hints": "Play one chord in all five shapes up the neck, then do the same for arpeggios.",
                "keywords": ["CAGED system guitar", "fretboard navigation"],
            },
            {
                "title": "Modes and Their Sound",
                "description": "Hear and use Dorian, Mixolydian, and Lydian over matching chord progressions.",
                "time": "70 mins",
                "difficulty": "Hard",
                "prerequisites": "CAGED system",
                "hints": "Improvise over a one-chord vamp per mode and target the characteristic note.",
                "keywords": ["guitar modes explained", "dorian mode guitar"],
            },
            {
                "title": "Alternate and Economy Picking Speed",
                "description": "Build clean picking speed with a relaxed hand and accurate synchronisation.",
                "time": "60 mins",
                "difficulty": "Hard",
                "prerequisites": "Minor pentatonic scale",
                "hints": "Increase the metronome by 4 BPM only after three clean repetitions.",
                "keywords": ["alternate picking speed", "economy picking guitar"],
            },
            {
                "title": "Arpeggio Sweeping",
                "description": "Sweep triad arpeggios across three and five strings without notes bleeding.",
                "time": "75 mins",
                "difficulty": "Hard",
                "prerequisites": "Alternate and economy picking speed",
                "hints": "Roll the fretting fingers and mute with both hands. Start painfully slow.",
                "keywords": ["sweep picking arpeggios", "sweep picking for beginners"],
            },
            {
                "title": "Improvising Over Changes",
                "description": "Target chord tones as the harmony moves in a ii-V-I or blues progression.",
                "time": "80 mins",
                "difficulty": "Hard",
                "prerequisites": "Modes and their sound",
                "hints": "Land on the third of each chord on beat one and record your solos for review.",
                "keywords": ["improvising over chord changes", "targeting chord tones guitar"],
            },
        ],
    },
}

GENERIC_TEMPLATES: List[Dict[str, Any]] = [
    {
        "title": "{hobby} Fundamentals",
        "description": "Learn the basic principles and foundation of {hobby}",
        "time": "45 mins",
        "difficulty": "Easy",
        "prerequisites": "None",
        "hints": "Start with basic exercises and practice daily",
        "keywords": ["{hobby} basics", "{hobby} for beginners"],
    },
    {
        "title": "Essential {hobby} Techniques",
        "description": "Master the core techniques every {level} should know",
        "time": "60 mins",
        "difficulty": "Medium",
        "prerequisites": "Basic understanding of fundamentals",
        "hints": "Focus on proper form and accuracy",
        "keywords": ["essential {hobby} techniques", "{hobby} tutorial"],
    },
    {
        "title": "{hobby} Practice Methods",
        "description": "Learn effective practice strategies for {hobby}",
        "time": "30 mins",
        "difficulty": "Easy",
        "prerequisites": "Basic techniques",
        "hints": "Create a consistent practice schedule",
        "keywords": ["how to practice {hobby}", "{hobby} practice routine"],
    },
]


def fallback_techniques(hobby: str, level: str, id_factory: Callable[[], str] = new_id) -> List[Technique]:
    """Return the authored techniques for ``hobby``/``level`` in curriculum order."""
    authored = FALLBACK_LIBRARY.get(hobby, {}).get(level)
    if authored:
        return [_technique_from_template(template, id_factory) for template in authored]

    context = {"hobby": hobby, "level": level.lower()}
    return [
        _technique_from_template(_interpolate(template, context), id_factory)
        for template in GENERIC_TEMPLATES
    ]


def generate_fallback_plan(
    hobby: str,
    level: str,
    *,
    id_factory: Callable[[], str] = new_id,
    now: Optional[datetime] = None,
) -> LearningPlan:
    """Build a complete plan without any external call. Never raises for string inputs."""
    hobby_name = (hobby or "").strip() or DEFAULT_HOBBY
    if level not in SKILL_LEVELS:
        logger.warning("Unknown skill level %r for fallback plan; using %s", level, DEFAULT_LEVEL)
        level = DEFAULT_LEVEL
    stamp = now or datetime.now(timezone.utc)
    techniques = fallback_techniques(hobby_name, level, id_factory)
    logger.info("Built fallback plan for %s (%s) with %d techniques", hobby_name, level, len(techniques))
    return LearningPlan(
        id=id_factory(),
        hobby=hobby_name,
        level=level,
        techniques=techniques,
        created_at=stamp,
        updated_at=stamp,
    )


def _interpolate(template: Dict[str, Any], context: Dict[str, str]) -> Dict[str, Any]:
    # Single pass: braces inside the substituted hobby name are left alone.
    def fill(text: str) -> str:
        return PLACEHOLDER_PATTERN.sub(lambda match: context[match.group(1)], text)

    return {
        key: [fill(item) for item in value] if isinstance(value, list) else fill(value)
        for key, value in template.items()
    }


def _technique_from_template(template: Dict[str, Any], id_factory: Callable[[], str]) -> Technique:
    return Technique(
        id=id_factory(),
        title=template["title"],
        description=template["description"],
        estimated_time=template["time"],
        difficulty=template["difficulty"],
        prerequisites=template["prerequisites"],
        practice_hints=template["hints"],
        search_keywords=list(template["keywords"]),
    )
