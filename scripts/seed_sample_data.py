"""
Seed sample tours, testimonials, gallery images and About page copy.

Each table is only seeded when it is empty, so re-running is harmless.

Usage:
  python scripts/seed_sample_data.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.travelsite.store import Store
from scripts._db_utils import script_session

SAMPLE_TOURS = [
    {
        "title": "Tiger's Nest Pilgrimage",
        "description": "Follow the sacred path to Paro Taktsang, where Guru Rinpoche meditated.",
        "long_description": (
            "The journey to Paro Taktsang (Tiger's Nest) follows in the footsteps of Guru Rinpoche, who brought "
            "Buddhism to Bhutan in the 8th century. Legend tells that he flew to this precipitous cliff on the back "
            "of a tigress."
        ),
        "location": "Paro",
        "duration": "7 Days / 6 Nights",
        "difficulty": "Moderate",
        "accommodation": "Heritage hotels and traditional farmhouses",
        "group_size": "Maximum 12 pilgrims",
        "price": 2850,
        "featured": True,
        "itinerary": [
            {"title": "Arrival in Paro", "description": "Traditional welcome ceremony. Evening prayers at Kyichu Lhakhang."},
            {"title": "Drukgyel Dzong & Preparation", "description": "Visit the ruins of Drukgyel Dzong. Afternoon meeting with a Buddhist scholar."},
            {"title": "Tiger's Nest Pilgrimage", "description": "Pre-dawn blessing ceremony, followed by the ascent to Taktsang."},
        ],
    },
    {
        "title": "Bumthang Sacred Circuit",
        "description": "Journey through Bhutan's spiritual heartland, visiting ancient temples.",
        "long_description": (
            "Bumthang Valley is considered the spiritual heart of Bhutan, home to some of the oldest Buddhist "
            "temples and monasteries. This journey takes you through four valleys."
        ),
        "location": "Bumthang",
        "duration": "10 Days / 9 Nights",
        "difficulty": "Moderate",
        "accommodation": "Heritage lodges and monastery guesthouses",
        "group_size": "Maximum 10 pilgrims",
        "price": 3200,
        "featured": True,
        "itinerary": [
            {"title": "Arrival in Paro and Transfer to Thimphu", "description": "Welcome ceremony and transfer to the capital."},
            {"title": "Journey to Punakha", "description": "Cross the Dochula Pass with its 108 chortens. Visit Chimi Lhakhang."},
            {"title": "Trongsa and Arrival in Bumthang", "description": "Visit the impressive Trongsa Dzong. Continue to Bumthang."},
        ],
    },
    {
        "title": "Druk Path Trek",
        "description": "Walk the ancient mountain route connecting Paro and Thimphu.",
        "long_description": (
            "The Druk Path is one of Bhutan's classic treks, following an ancient trading route. This journey takes "
            "you through stunning landscapes."
        ),
        "location": "Paro to Thimphu",
        "duration": "5 Days / 4 Nights",
        "difficulty": "Challenging",
        "accommodation": "Traditional camping and mountain huts",
        "group_size": "Maximum 8 pilgrims",
        "price": 1950,
        "featured": True,
        "itinerary": [
            {"title": "Paro to Jele Dzong", "description": "Blessing at Paro Dzong, then ascend through pine forests to Jele Dzong."},
            {"title": "Jele Dzong to Jangchulakha", "description": "Ridge-line trekking with views of Mount Chomolhari."},
            {"title": "Jangchulakha to Jimilang Tsho", "description": "Hike to the sacred Jimilang Tsho (Sand Ox Lake)."},
        ],
    },
    {
        "title": "Haa Valley Heritage",
        "description": "Explore the pristine Haa Valley, known for its unique traditions.",
        "long_description": (
            "Discover the lesser-visited Haa Valley, offering a glimpse into traditional Bhutanese life and "
            "spirituality away from the main tourist trails."
        ),
        "location": "Haa",
        "duration": "6 Days / 5 Nights",
        "difficulty": "Easy",
        "accommodation": "Farmhouses and local guesthouses",
        "group_size": "Maximum 10 pilgrims",
        "price": 2500,
        "featured": False,
        "itinerary": [
            {"title": "Arrival in Paro, drive to Haa", "description": "Scenic drive over the Chele La pass to Haa Valley."},
            {"title": "Lhakhang Karpo & Nagpo", "description": "Visit the ancient White and Black Temples."},
            {"title": "Explore Local Villages & Hike", "description": "Gentle hike through traditional villages and a traditional meal."},
        ],
    },
]

SAMPLE_TESTIMONIALS = [
    {
        "name": "Sarah M.",
        "location": "United States",
        "content": "The journey to Tiger's Nest wasn't just a trek, but a transformation.",
    },
    {
        "name": "David L.",
        "location": "United Kingdom",
        "content": "The attention to historical detail and spiritual significance made each moment deeply meaningful.",
    },
    {
        "name": "Aisha K.",
        "location": "Canada",
        "content": "The Bumthang circuit was magical. Our guide's knowledge brought the ancient sites to life.",
    },
]

SAMPLE_GALLERY = [
    {"caption": "Punakha Dzong at confluence", "type": "dzong"},
    {"caption": "Prayer Flags on Chele La Pass", "type": "prayerFlags"},
    {"caption": "Young Monks studying scriptures", "type": "monks"},
    {"caption": "Intricate Altar Detail, Kurjey Lhakhang", "type": "temple"},
    {"caption": "Himalayan Peaks near Jomolhari Base Camp", "type": "mountains"},
    {"caption": "Mahakala Dance Mask from Paro Tshechu", "type": "mask"},
    {"caption": "Taktsang Monastery Clinging to Cliff", "type": "tigerNest"},
    {"caption": "Jakar Dzong overlooking Bumthang Valley", "type": "bumthang"},
]

SAMPLE_ABOUT = {
    "history_text": (
        "Sacred Bhutan Travels was founded by descendants of traditional pilgrimage guides who served the royal "
        "court of Bhutan for generations."
    ),
    "mission_text": (
        "Today, we combine this ancestral knowledge with modern expertise to create journeys that honor Bhutan's "
        "spiritual heritage while providing comfort and insight to international pilgrims."
    ),
}


def seed(store: Store) -> dict[str, int]:
    added = {"tours": 0, "testimonials": 0, "gallery": 0}
    if not store.get_tours():
        for tour in SAMPLE_TOURS:
            store.create_tour(tour)
        added["tours"] = len(SAMPLE_TOURS)
    if not store.get_testimonials():
        for t in SAMPLE_TESTIMONIALS:
            store.create_testimonial(t)
        added["testimonials"] = len(SAMPLE_TESTIMONIALS)
    if not store.get_gallery_images():
        for img in SAMPLE_GALLERY:
            store.create_gallery_image(img)
        added["gallery"] = len(SAMPLE_GALLERY)
    # Only fill in copy that still carries the placeholder text.
    about = store.get_content("about")
    if about["historyText"].startswith("Our story is still being written"):
        store.upsert_content("about", SAMPLE_ABOUT)
    return added


def main() -> None:
    db_url = (os.environ.get("DATABASE_URL") or "sqlite:///travelsite.db").strip()
    with script_session(db_url) as s:
        added = seed(Store(s))
    for table, n in added.items():
        print(f"{table}: {'added ' + str(n) if n else 'already present, skipped'}")


if __name__ == "__main__":
    main()
