"""Word corpus and board generation for Codenames rounds."""

from __future__ import annotations

import random
from typing import Sequence

from .codenames_state import BOARD_SIZE, Card, Team

STARTING_TEAM_CARDS = 9
OTHER_TEAM_CARDS = 8
NEUTRAL_CARDS = BOARD_SIZE - 1 - STARTING_TEAM_CARDS - OTHER_TEAM_CARDS

DEFAULT_WORDS: tuple[str, ...] = (
    "africa",
    "agent",
    "air",
    "alien",
    "alps",
    "amazon",
    "ambulance",
    "america",
    "angel",
    "antarctica",
    "apple",
    "arm",
    "atlantis",
    "australia",
    "aztec",
    "back",
    "ball",
    "band",
    "bank",
    "bar",
    "bark",
    "bat",
    "battery",
    "beach",
    "bear",
    "beat",
    "bed",
    "beijing",
    "bell",
    "belt",
    "berlin",
    "bermuda",
    "berry",
    "bill",
    "block",
    "board",
    "bolt",
    "bomb",
    "bond",
    "boom",
    "boot",
    "bottle",
    "bow",
    "box",
    "bridge",
    "brush",
    "buck",
    "buffalo",
    "bug",
    "bugle",
    "button",
    "calf",
    "canada",
    "cap",
    "capital",
    "car",
    "card",
    "carrot",
    "casino",
    "cast",
    "cat",
    "cell",
    "centaur",
    "center",
    "chair",
    "change",
    "charge",
    "check",
    "chest",
    "chick",
    "china",
    "chocolate",
    "church",
    "circle",
    "cliff",
    "cloak",
    "clock",
    "club",
    "code",
    "cold",
    "comic",
    "compound",
    "concert",
    "conductor",
    "contract",
    "cook",
    "copper",
    "cotton",
    "court",
    "cover",
    "crane",
    "crash",
    "cricket",
    "cross",
    "crown",
    "cycle",
    "czech",
    "dance",
    "date",
    "day",
    "death",
    "deck",
    "degree",
    "diamond",
    "dice",
    "dinosaur",
    "disease",
    "doctor",
    "dog",
    "draft",
    "dragon",
    "dress",
    "drill",
    "drop",
    "duck",
    "dwarf",
    "eagle",
    "egypt",
    "embassy",
    "engine",
    "england",
    "europe",
    "eye",
    "face",
    "fair",
    "fall",
    "fan",
    "fence",
    "field",
    "fighter",
    "figure",
    "file",
    "film",
    "fire",
    "fish",
    "flute",
    "fly",
    "foot",
    "force",
    "forest",
    "fork",
    "france",
    "game",
    "gas",
    "genius",
    "germany",
    "ghost",
    "giant",
    "glass",
    "glove",
    "gold",
    "grace",
    "grass",
    "greece",
    "green",
    "ground",
    "ham",
    "hand",
    "hawk",
    "head",
    "heart",
    "helicopter",
    "himalayas",
    "hole",
    "hollywood",
    "honey",
    "hood",
    "hook",
    "horn",
    "horse",
    "horseshoe",
    "hospital",
    "hotel",
    "ice",
    "iron",
    "ivory",
    "jack",
    "jam",
    "jet",
    "jupiter",
    "kangaroo",
    "ketchup",
    "key",
    "kid",
    "king",
    "kiwi",
    "knife",
    "knight",
    "lab",
    "lap",
    "laser",
    "lawyer",
    "lead",
    "lemon",
    "leprechaun",
    "life",
    "light",
    "limousine",
    "line",
    "link",
    "lion",
    "litter",
    "loch",
    "lock",
    "log",
    "london",
    "luck",
    "mail",
    "mammoth",
    "maple",
    "marble",
    "march",
    "mass",
    "match",
    "mercury",
    "mexico",
    "microscope",
    "millionaire",
    "mine",
    "mint",
    "missile",
    "model",
    "mole",
    "moon",
    "moscow",
    "mount",
    "mouse",
    "mouth",
    "mug",
    "nail",
    "needle",
    "net",
    "new",
    "night",
    "ninja",
    "note",
    "novel",
    "nurse",
    "nut",
    "octopus",
    "oil",
    "olive",
    "olympus",
    "opera",
    "orange",
    "organ",
    "palm",
    "pan",
    "pants",
    "paper",
    "parachute",
    "park",
    "part",
    "pass",
    "paste",
    "penguin",
    "phoenix",
    "piano",
    "pie",
    "pilot",
    "pin",
    "pipe",
    "pirate",
    "pistol",
    "pit",
    "pitch",
    "plane",
    "plastic",
    "plate",
    "platypus",
    "play",
    "plot",
    "point",
    "poison",
    "pole",
    "police",
    "pool",
    "port",
    "post",
    "pound",
    "press",
    "princess",
    "pumpkin",
    "pupil",
    "pyramid",
    "queen",
    "rabbit",
    "racket",
    "ray",
    "revolution",
    "ring",
    "robin",
    "robot",
    "rock",
    "rome",
    "root",
    "rose",
    "roulette",
    "round",
    "row",
    "ruler",
    "satellite",
    "saturn",
    "scale",
    "school",
    "scientist",
    "scorpion",
    "screen",
    "scuba",
    "seal",
    "server",
    "shadow",
    "shakespeare",
    "shark",
    "ship",
    "shoe",
    "shop",
    "shot",
    "sink",
    "skyscraper",
    "slip",
    "slug",
    "smuggler",
    "snow",
    "snowman",
    "sock",
    "soldier",
    "soul",
    "sound",
    "space",
    "spell",
    "spider",
    "spike",
    "spine",
    "spot",
    "spring",
    "spy",
    "square",
    "stadium",
    "staff",
    "star",
    "state",
    "stick",
    "stock",
    "straw",
    "stream",
    "strike",
    "string",
    "sub",
    "suit",
    "superhero",
    "swing",
    "switch",
    "table",
    "tablet",
    "tag",
    "tail",
    "tap",
    "teacher",
    "telescope",
    "temple",
    "theater",
    "thief",
    "thumb",
    "tick",
    "tie",
    "time",
    "tokyo",
    "tooth",
    "torch",
    "tower",
    "track",
    "train",
    "triangle",
    "trip",
    "trunk",
    "tube",
    "turkey",
    "undertaker",
    "unicorn",
    "vacuum",
    "van",
    "vet",
    "wake",
    "wall",
    "war",
    "washer",
    "washington",
    "watch",
    "water",
    "wave",
    "web",
    "well",
    "whale",
    "whip",
    "wind",
    "witch",
    "worm",
    "yard",
)


def generate_deck(
    active_team: Team,
    words: Sequence[str] = DEFAULT_WORDS,
    rng: random.Random | None = None,
) -> tuple[Card, ...]:
    """Deal a shuffled 25-card board for a round started by `active_team`.

    Team membership is fixed by slot over the drawn words: slot 0 is the
    assassin, the next 9 belong to `active_team`, the next 8 to the other
    team and the last 7 are neutral. The dealt cards are then shuffled.
    """
    rng = rng or random.Random()
    corpus = list(dict.fromkeys(words))
    if len(corpus) < BOARD_SIZE:
        raise ValueError(f"word list must contain at least {BOARD_SIZE} distinct words.")

    drawn = rng.sample(corpus, BOARD_SIZE)
    other_start = 1 + STARTING_TEAM_CARDS
    neutral_start = other_start + OTHER_TEAM_CARDS

    cards: list[Card] = []
    for index, word in enumerate(drawn):
        if index == 0:
            cards.append(Card(word=word, team=None, is_assassin=True))
        elif index < other_start:
            cards.append(Card(word=word, team=active_team))
        elif index < neutral_start:
            cards.append(Card(word=word, team=active_team.other))
        else:
            cards.append(Card(word=word, team=None))

    rng.shuffle(cards)
    return tuple(cards)
