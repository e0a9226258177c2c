"""
Database initialization script for EcoNews
Creates tables and seeds a sample news corpus for development
"""
import asyncio
import random
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from app.config import settings
from app.db.database import Base
from app.models import User, Region, Company, News


REGION_NAMES = [
    "Kyiv Oblast", "Lviv Oblast", "Odesa Oblast", "Kharkiv Oblast",
    "Dnipro Oblast", "Zaporizhzhia Oblast", "Vinnytsia Oblast", "Poltava Oblast",
]

COMPANY_NAMES = [
    ("Dnipro Steelworks", "Dnipro Oblast"),
    ("Black Sea Port Terminal", "Odesa Oblast"),
    ("Carpathian Timber", "Lviv Oblast"),
    ("Kharkiv Thermal Power", "Kharkiv Oblast"),
    ("Zaporizhzhia Aluminium", "Zaporizhzhia Oblast"),
    ("Poltava Gas Processing", "Poltava Oblast"),
    ("Kyiv Water Utility", "Kyiv Oblast"),
]

AUTHORS = [
    ("author-olena", "olena.k"),
    ("author-taras", "taras.m"),
    ("author-iryna", "iryna.s"),
]

TOPICS = [
    "air quality readings exceed limits",
    "new wastewater treatment line commissioned",
    "emission tax norms revised",
    "river sampling shows heavy metals",
    "reforestation programme expands",
    "environmental passport updated",
    "soil contamination survey published",
]


async def init_db():
    """Initialize database and create tables"""
    engine = create_async_engine(settings.database_url, echo=False)

    async with engine.begin() as conn:
        print("Dropping existing tables...")
        await conn.run_sync(Base.metadata.drop_all)
        print("Creating ORM tables...")
        await conn.run_sync(Base.metadata.create_all)
        print("All ORM tables created")

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        await seed_corpus(session)

    await engine.dispose()
    print("Database initialization complete")


async def seed_corpus(session: AsyncSession):
    """Seed regions, companies, authors and a year of news."""
    # Fixed seed for consistent data across runs
    random.seed(20240101)

    regions = {name: Region(name=name) for name in REGION_NAMES}
    session.add_all(regions.values())

    companies = [
        Company(name=name, description=f"{name} operations", region=regions[region_name])
        for name, region_name in COMPANY_NAMES
    ]
    session.add_all(companies)

    authors = [User(id=user_id, user_name=user_name) for user_id, user_name in AUTHORS]
    session.add_all(authors)
    await session.flush()

    start = datetime(2024, 1, 1, 8, 0, 0)
    news_items = []
    for i in range(120):
        post_date = start + timedelta(days=random.randint(0, 364), hours=random.randint(0, 10))
        topic = random.choice(TOPICS)
        tagged_regions = random.sample(list(regions.values()), k=random.randint(0, 2))
        tagged_companies = random.sample(companies, k=random.randint(0, 1))
        news = News(
            title=f"#{i + 1}: {topic}",
            body=f"Monitoring report {i + 1}: {topic}. " * 8,
            post_date=post_date,
            source_url=f"https://example.org/news/{i + 1}",
        )
        news.regions.extend(tagged_regions)
        news.companies.extend(tagged_companies)
        news.authors.append(random.choice(authors))
        news_items.append(news)

    session.add_all(news_items)
    await session.commit()

    print(f"  Created {len(regions)} regions")
    print(f"  Created {len(companies)} companies")
    print(f"  Created {len(authors)} authors")
    print(f"  Created {len(news_items)} news entries")


if __name__ == "__main__":
    asyncio.run(init_db())
