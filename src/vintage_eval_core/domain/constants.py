"""
Domain Constants

Centrally manages the weight tables and matching vocabularies shared across the scorers.
"""

# Score dimensions, in the order they are reported
SCORE_DIMENSIONS = [
    "name",
    "maker",
    "era",
    "style",
    "category",
    "domain",
    "origin",
    "value",
    "features",
    "authentication",
]

# Weight profiles for the aggregate score.
# photo_only: tuned for what can be judged from a photograph alone;
# value, features and authentication need physical inspection or market research.
WEIGHT_PROFILES = {
    "photo_only": {
        "name": 70,
        "category": 8,
        "domain": 8,
        "era": 6,
        "style": 5,
        "maker": 2,
        "origin": 1,
        "value": 0,
        "features": 0,
        "authentication": 0,
    },
    "balanced": {
        "name": 15,
        "maker": 15,
        "era": 10,
        "style": 10,
        "category": 5,
        "domain": 5,
        "origin": 5,
        "value": 20,
        "features": 10,
        "authentication": 5,
    },
}

DEFAULT_WEIGHT_PROFILE = "photo_only"
SCORING_WEIGHTS = WEIGHT_PROFILES[DEFAULT_WEIGHT_PROFILE]

# Corpus-level pass gate (overall accuracy is reported as 0 below this average)
PASS_THRESHOLD = 70

# Per-dimension classification
PARTIAL_MATCH_THRESHOLD = 70

# Score distribution bands: (label, lower bound inclusive)
DISTRIBUTION_BANDS = [
    ("excellent", 90),
    ("good", 75),
    ("acceptable", 60),
    ("poor", 40),
    ("failed", 0),
]

TOP_FAILURE_PATTERNS = 10

VALID_ITEM_CATEGORIES = ["antique", "vintage", "modern_branded", "modern_generic"]
VALID_DIFFICULTIES = ["easy", "medium", "hard", "expert"]

# Representative items for a quick smoke run (one per domain, mixed difficulty)
SMOKE_TEST_ITEM_IDS = ["furn-001", "ceram-003", "jwl-001", "art-001", "silv-003"]

# Object-type vocabulary; a shared term earns partial credit on the name
ITEM_TYPE_TERMS = [
    # Furniture
    "chair", "table", "desk", "cabinet", "sideboard", "commode", "chest", "bureau",
    "armchair", "rocker", "rocking chair", "settee", "sofa", "ottoman", "bench",
    # Ceramics
    "vase", "bowl", "plate", "charger", "figurine", "figure", "urn", "pitcher", "jar",
    "pot", "dinnerware", "teapot", "platter",
    # Art
    "painting", "print", "lithograph", "woodblock", "sculpture", "bronze",
    "watercolor", "drawing", "etching",
    # Jewelry
    "watch", "ring", "brooch", "necklace", "bracelet", "earrings", "pendant",
    "locket", "cameo", "pin",
    # Silver
    "flatware", "fork", "spoon", "knife", "tray", "candlestick", "serving",
    # Lighting
    "lamp", "chandelier", "sconce", "lantern",
    # Textiles
    "rug", "carpet", "blanket", "quilt", "tapestry", "textile",
    # Toys
    "bear", "doll", "car", "train", "toy", "teddy",
    # Books
    "book", "album", "record", "vinyl", "first edition",
    # Glass
    "glass vase", "art glass", "crystal", "glassware",
]

MATERIAL_TERMS = [
    "silver", "gold", "bronze", "brass", "copper", "iron", "porcelain", "ceramic",
    "wood", "leather", "mohair", "silk", "wool",
]

# Style families: base style -> synonyms accepted as the same family
STYLE_SYNONYMS = {
    "mid-century modern": ["mcm", "mid century", "midcentury", "modernist", "modern", "eames era", "1950s", "1960s"],
    "art deco": ["deco", "art moderne", "machine age", "streamline moderne", "jazz age", "geometric modern"],
    "art nouveau": ["nouveau", "jugendstil", "liberty style", "arts nouveau", "organic"],
    "arts and crafts": ["craftsman", "mission", "mission style", "american arts and crafts", "stickley"],
    "bauhaus": ["international style", "modernist", "german modern", "functionalist"],
    "victorian": ["19th century", "high victorian", "eastlake", "aesthetic movement", "edwardian"],
    "georgian": ["neoclassical", "federal", "regency", "adam style", "english antique"],
    "rococo": ["louis xv", "french rococo", "baroque", "ornate"],
    "chippendale": ["philadelphia chippendale", "american chippendale", "english chippendale", "colonial"],
    "colonial": ["early american", "federal", "american colonial", "shaker"],
    "shaker": ["american vernacular", "simple", "utilitarian", "plain"],
    "japanese aesthetic": ["japonesque", "aesthetic movement", "japonism", "anglo-japanese"],
    "american art pottery": ["art pottery", "american pottery", "ohio pottery"],
    "impressionism": ["french impressionism", "impressionist", "plein air"],
    "post-impressionism": ["post impressionist", "expressionism", "modern art"],
    "ukiyo-e": ["japanese woodblock", "edo period", "japanese print", "woodcut"],
    "western american": ["american realism", "beaux-arts", "cowboy art", "western art"],
    "danish modern": ["scandinavian", "scandinavian modern", "nordic", "danish"],
    "viennese secession": ["vienna secession", "bentwood", "cafe style", "austrian"],
    "native american": ["southwestern", "navajo", "tribal", "indigenous"],
    "persian": ["oriental", "iranian", "middle eastern"],
}

PERIOD_PHRASES = ["19th century", "20th century", "18th century", "1800s", "1900s"]

# Predicted maker values that count as "no attribution"
UNATTRIBUTED_MAKER_TERMS = ["unknown", "unattributed"]
