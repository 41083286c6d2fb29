"""
Demo Data Seeder

Loads a demo menu, testimonials, restaurant story, menu intro copy and
location settings into the configured MongoDB database.
Run from project root: python scripts/seed.py [--reset]
"""

import argparse
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from aroma.core.config import get_settings, setup_logging
from aroma.database import (
    MENU_CARD_COPIES,
    MENU_SECTIONS,
    RESTAURANT_STORIES,
    SETTINGS,
    TESTIMONIALS,
    get_db,
    init_db,
)
from aroma.repositories import (
    MenuCardCopyRepository,
    MenuRepository,
    RestaurantStoryRepository,
    SettingsRepository,
    TestimonialRepository,
)
from aroma.schemas import (
    MenuCardCopyCreate,
    MenuSectionIn,
    RestaurantStoryCreate,
    SettingsIn,
    TestimonialCreate,
)

MENU = [
    {
        "title_en": "Appetizers",
        "title_ar": "المقبلات",
        "title_ru": "Закуски",
        "subsections": [
            {
                "section_en": "Cold",
                "section_ar": "باردة",
                "section_ru": "Холодные",
                "items": [
                    {
                        "name_en": "Hummus",
                        "name_ar": "حمص",
                        "name_ru": "Хумус",
                        "description_en": "Chickpea purée with tahini and olive oil",
                        "description_ar": "حمص مهروس مع الطحينة وزيت الزيتون",
                        "description_ru": "Пюре из нута с тахини и оливковым маслом",
                        "price": "8.99",
                    },
                    {
                        "name_en": "Baba Ganoush",
                        "name_ar": "بابا غنوج",
                        "name_ru": "Баба гануш",
                        "description_en": "Smoked aubergine dip",
                        "description_ar": "متبل الباذنجان المدخن",
                        "description_ru": "Соус из копчёных баклажанов",
                        "price": "9.50",
                    },
                ],
            },
            {
                "section_en": "Hot",
                "section_ar": "ساخنة",
                "section_ru": "Горячие",
                "items": [
                    {
                        "name_en": "Samosa",
                        "name_ar": "سمبوسة",
                        "name_ru": "Самоса",
                        "description_en": "Crisp pastry filled with spiced potatoes",
                        "description_ar": "عجينة مقرمشة محشوة بالبطاطا المتبلة",
                        "description_ru": "Хрустящее тесто с пряным картофелем",
                        "price": "7.00",
                    },
                ],
            },
        ],
    },
    {
        "title_en": "Mains",
        "title_ar": "الأطباق الرئيسية",
        "title_ru": "Основные блюда",
        "subsections": [
            {
                "section_en": "Curries",
                "section_ar": "كاري",
                "section_ru": "Карри",
                "items": [
                    {
                        "name_en": "Butter Chicken",
                        "name_ar": "دجاج بالزبدة",
                        "name_ru": "Курица в масляном соусе",
                        "description_en": "Tandoori chicken in a creamy tomato sauce",
                        "description_ar": "دجاج تندوري بصلصة الطماطم والكريمة",
                        "description_ru": "Курица тандури в сливочно-томатном соусе",
                        "price": "16.50",
                    },
                ],
            },
        ],
    },
]

TESTIMONIALS_DATA = [
    {"customerName": "Jane Bennett", "message": "The best hummus in town."},
    {"customerName": "Omar Haddad", "message": "Warm service and wonderful curries."},
    {"customerName": "Irina Volkova", "message": "A lovely evening, we will be back."},
]

STORY = {
    "tagline": {"en": "Two cuisines, one table", "ar": "مطبخان على مائدة واحدة", "ru": "Две кухни, один стол"},
    "description": {
        "en": "Family recipes from India and the Levant, cooked fresh every day.",
        "ar": "وصفات عائلية من الهند والشام تُطهى طازجة كل يوم.",
        "ru": "Семейные рецепты Индии и Леванта, каждый день свежие.",
    },
    "author": {"en": "The Aroma family", "ar": "عائلة أروما", "ru": "Семья Арома"},
}

MENU_COPY = {
    "paragraphs": {
        "en": ["Spices roasted in-house.", "Bread baked to order."],
        "ar": ["توابل محمصة في مطبخنا.", "خبز يُخبز عند الطلب."],
        "ru": ["Специи обжариваем сами.", "Хлеб печём под заказ."],
    }
}

SETTINGS_DATA = {
    "locations": [
        {
            "address": ["12 Spice Street", "Dubai Marina", "Dubai"],
            "gettingHere": {
                "steps": ["Take the metro to DMCC", "Walk five minutes towards the marina"],
                "mapEmbedSrc": "https://www.google.com/maps/embed?pb=aroma",
            },
            "phoneNumbers": ["+971 50123 45678"],
            "emails": ["hello@aroma-restaurant.com"],
            "openingHours": "Daily 12:00 - 23:00",
        }
    ]
}


def seed(reset: bool = False) -> None:
    settings = get_settings()
    db = get_db()
    init_db(db)

    print("=" * 60)
    print(f"🌱 Seeding {settings.database_name} at {settings.mongodb_url}")
    print("=" * 60)

    if reset:
        for name in (MENU_SECTIONS, TESTIMONIALS, RESTAURANT_STORIES, MENU_CARD_COPIES, SETTINGS):
            db[name].delete_many({})
        print("🧹 Existing content removed")

    menu = MenuRepository(db)
    for section in MENU:
        created = menu.create_section(MenuSectionIn(**section))
        print(f"   ✅ Menu section: {created['title_en']}")

    testimonials = TestimonialRepository(db)
    for data in TESTIMONIALS_DATA:
        testimonials.create(TestimonialCreate(**data))
    print(f"   ✅ Testimonials: {len(TESTIMONIALS_DATA)}")

    RestaurantStoryRepository(db).create(RestaurantStoryCreate(**STORY))
    print("   ✅ Restaurant story")

    MenuCardCopyRepository(db).create(MenuCardCopyCreate(**MENU_COPY))
    print("   ✅ Menu copy")

    SettingsRepository(db).upsert(SettingsIn(**SETTINGS_DATA))
    print("   ✅ Settings")

    print("=" * 60)
    print("✅ Done")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo content")
    parser.add_argument("--reset", action="store_true", help="Remove existing content first")
    args = parser.parse_args()

    setup_logging()
    seed(reset=args.reset)
