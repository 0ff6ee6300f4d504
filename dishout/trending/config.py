from __future__ import annotations

from dataclasses import dataclass, field

_IMAGE_BASE = "/static/dishes"

# Checked in order against the lowercased term; first keyword contained wins.
KEYWORD_IMAGES: dict[str, str] = {
    "shawarma": f"{_IMAGE_BASE}/shawarma.jpg",
    "biryani": f"{_IMAGE_BASE}/biryani.jpg",
    "machboos": f"{_IMAGE_BASE}/machboos.jpg",
    "burger": f"{_IMAGE_BASE}/burger.jpg",
    "pizza": f"{_IMAGE_BASE}/pizza.jpg",
    "sushi": f"{_IMAGE_BASE}/sushi.jpg",
    "ramen": f"{_IMAGE_BASE}/ramen.jpg",
    "pasta": f"{_IMAGE_BASE}/pasta.jpg",
    "kunafa": f"{_IMAGE_BASE}/kunafa.jpg",
    "falafel": f"{_IMAGE_BASE}/falafel.jpg",
    "hummus": f"{_IMAGE_BASE}/hummus.jpg",
    "steak": f"{_IMAGE_BASE}/steak.jpg",
    "salad": f"{_IMAGE_BASE}/salad.jpg",
    "taco": f"{_IMAGE_BASE}/tacos.jpg",
    "cake": f"{_IMAGE_BASE}/cake.jpg",
    "coffee": f"{_IMAGE_BASE}/coffee.jpg",
}

DEFAULT_IMAGE = f"{_IMAGE_BASE}/default.jpg"

DEFAULT_SEEDS: list[dict] = [
    {"id": "seed-shawarma", "display_name": "Shawarma", "query_text": "Find the best shawarma near me",
     "image_url": KEYWORD_IMAGES["shawarma"], "popularity": 120},
    {"id": "seed-biryani", "display_name": "Chicken Biryani", "query_text": "Find the best chicken biryani near me",
     "image_url": KEYWORD_IMAGES["biryani"], "popularity": 105},
    {"id": "seed-machboos", "display_name": "Lamb Machboos", "query_text": "Find the best lamb machboos near me",
     "image_url": KEYWORD_IMAGES["machboos"], "popularity": 90},
    {"id": "seed-kunafa", "display_name": "Kunafa", "query_text": "Find the best kunafa near me",
     "image_url": KEYWORD_IMAGES["kunafa"], "popularity": 85},
    {"id": "seed-burger", "display_name": "Smash Burger", "query_text": "Find the best smash burger near me",
     "image_url": KEYWORD_IMAGES["burger"], "popularity": 80},
    {"id": "seed-sushi", "display_name": "Salmon Sushi", "query_text": "Find the best salmon sushi near me",
     "image_url": KEYWORD_IMAGES["sushi"], "popularity": 70},
    {"id": "seed-pizza", "display_name": "Margherita Pizza", "query_text": "Find the best margherita pizza near me",
     "image_url": KEYWORD_IMAGES["pizza"], "popularity": 65},
]


@dataclass(frozen=True)
class TrendingConfig:
    store_key: str = "dishout_trending"
    max_listed: int = 6
    increment: int = 5
    base_score: int = 50
    min_term_length: int = 3
    query_template: str = "Find the best {term} near me"
    keyword_images: dict[str, str] = field(default_factory=lambda: dict(KEYWORD_IMAGES))
    default_image: str = DEFAULT_IMAGE
    seeds: list[dict] = field(default_factory=lambda: [dict(s) for s in DEFAULT_SEEDS])


DEFAULT_TRENDING_CONFIG = TrendingConfig()
