#!/usr/bin/env python3
"""
Database management script for the SubTo Marketplace API.
Creates tables, resets a development database, checks connectivity and seeds sample listings.
"""

import asyncio
import argparse
import logging
import sys
import uuid
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select

from subto.config import settings
from subto.database import (
    AsyncSessionLocal,
    close_db_connection,
    create_tables,
    drop_tables,
    test_database_connection,
)
from subto.models.profile import Profile
from subto.models.property import Property, PropertyStatus, PropertyType
from subto.repositories.property import PropertyRepository

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# Annual taxes and insurance, divided by 12 when stored
SAMPLE_PROPERTIES = [
    {
        "title": "Charming 3BR Starter Home in East Austin",
        "description": (
            "Perfect starter home in up-and-coming East Austin neighborhood. Original hardwood floors, "
            "updated kitchen and a large backyard. Low monthly payments on the existing loan."
        ),
        "address": "1847 E 12th Street",
        "city": "Austin",
        "state": "TX",
        "zip_code": "78702",
        "property_type": PropertyType.SINGLE_FAMILY,
        "bedrooms": 3,
        "bathrooms": "2",
        "square_feet": 1250,
        "current_loan_balance": "145000",
        "interest_rate": "4.25",
        "monthly_payment": "1180",
        "asking_price": "185000",
        "property_value": "195000",
        "monthly_rent": "1650",
        "annual_taxes": "3800",
        "annual_insurance": "1200",
        "hoa_fees": "0",
        "loan_type": "Conventional 30-year",
        "lender": "Wells Fargo",
        "years_remaining": 22,
        "due_on_sale_clause": True,
        "featured": False,
    },
    {
        "title": "Modern 2BR Townhouse Near Downtown Denver",
        "description": (
            "Well kept townhouse minutes from downtown Denver with an open floor plan, finished basement "
            "and attached garage. The low interest rate makes this a strong subject-to opportunity."
        ),
        "address": "2156 S Delaware Street",
        "city": "Denver",
        "state": "CO",
        "zip_code": "80223",
        "property_type": PropertyType.TOWNHOUSE,
        "bedrooms": 2,
        "bathrooms": "2.5",
        "square_feet": 1450,
        "current_loan_balance": "275000",
        "interest_rate": "3.75",
        "monthly_payment": "1680",
        "asking_price": "315000",
        "property_value": "325000",
        "monthly_rent": "2200",
        "annual_taxes": "2400",
        "annual_insurance": "950",
        "hoa_fees": "185",
        "loan_type": "FHA 30-year",
        "lender": "Chase Bank",
        "years_remaining": 26,
        "due_on_sale_clause": True,
        "featured": True,
    },
    {
        "title": "Luxury 3BR Condo with Mountain Views",
        "description": (
            "Condo in the Scottsdale area with mountain views, a balcony and resort-style amenities. "
            "Assumable VA loan at a sub-3% rate."
        ),
        "address": "7141 E Rancho Vista Drive #3007",
        "city": "Scottsdale",
        "state": "AZ",
        "zip_code": "85251",
        "property_type": PropertyType.CONDO,
        "bedrooms": 3,
        "bathrooms": "2",
        "square_feet": 1850,
        "current_loan_balance": "380000",
        "interest_rate": "2.875",
        "monthly_payment": "2240",
        "asking_price": "435000",
        "property_value": "450000",
        "monthly_rent": "2850",
        "annual_taxes": "3200",
        "annual_insurance": "800",
        "hoa_fees": "425",
        "loan_type": "VA 30-year",
        "lender": "USAA",
        "years_remaining": 24,
        "due_on_sale_clause": False,
        "featured": True,
    },
    {
        "title": "Income-Producing Duplex in Music City",
        "description": (
            "Two 2BR/1BA units with separate entrances and utilities, both rented to stable tenants. "
            "Good fit for house hacking with subject-to financing."
        ),
        "address": "1823 16th Avenue South",
        "city": "Nashville",
        "state": "TN",
        "zip_code": "37212",
        "property_type": PropertyType.DUPLEX,
        "bedrooms": 4,
        "bathrooms": "2",
        "square_feet": 2200,
        "current_loan_balance": "285000",
        "interest_rate": "3.95",
        "monthly_payment": "1725",
        "asking_price": "365000",
        "property_value": "375000",
        "monthly_rent": "2800",
        "annual_taxes": "2200",
        "annual_insurance": "1350",
        "hoa_fees": "0",
        "loan_type": "Conventional 30-year",
        "lender": "Regions Bank",
        "years_remaining": 21,
        "due_on_sale_clause": True,
        "featured": False,
    },
    {
        "title": "Triplex Investment Property Near Atlanta",
        "description": (
            "Brick triplex with three 1BR/1BA units and a good rental history. Needs minor cosmetic "
            "updates; strong cash flow potential."
        ),
        "address": "875 Oakland Avenue SE",
        "city": "Atlanta",
        "state": "GA",
        "zip_code": "30315",
        "property_type": PropertyType.MULTI_FAMILY,
        "bedrooms": 3,
        "bathrooms": "3",
        "square_feet": 1950,
        "current_loan_balance": "165000",
        "interest_rate": "4.5",
        "monthly_payment": "1245",
        "asking_price": "225000",
        "property_value": "235000",
        "monthly_rent": "2100",
        "annual_taxes": "2800",
        "annual_insurance": "1450",
        "hoa_fees": "0",
        "loan_type": "Investment Property Loan",
        "lender": "SunTrust Bank",
        "years_remaining": 19,
        "due_on_sale_clause": True,
        "featured": False,
    },
]

MONEY_FIELDS = (
    "bathrooms", "current_loan_balance", "interest_rate", "monthly_payment",
    "asking_price", "property_value", "monthly_rent", "hoa_fees",
)


def build_sample_listing(sample: dict, owner_id: uuid.UUID) -> dict:
    """Turn a sample entry into Property column values owned by ``owner_id``."""
    listing = {k: v for k, v in sample.items() if k not in ("annual_taxes", "annual_insurance")}
    for field in MONEY_FIELDS:
        listing[field] = Decimal(listing[field])
    listing["property_taxes"] = (Decimal(sample["annual_taxes"]) / 12).quantize(Decimal("0.01"))
    listing["insurance"] = (Decimal(sample["annual_insurance"]) / 12).quantize(Decimal("0.01"))
    listing.update({
        "user_id": owner_id,
        "status": PropertyStatus.ACTIVE,
        "view_count": 0,
    })
    return listing


class DatabaseManager:
    """Maintenance commands run against the configured database."""

    async def create(self) -> None:
        await create_tables()

    async def reset(self) -> None:
        """Drop and recreate every table. Refused outside development and testing."""
        logger.warning("Resetting database - all data will be lost!")
        await drop_tables()
        await create_tables()
        logger.info("Database reset completed")

    async def check(self) -> bool:
        if not await test_database_connection():
            return False

        async with AsyncSessionLocal() as session:
            repo = PropertyRepository(session)
            total = await repo.count()
            active = await repo.count(Property.status == PropertyStatus.ACTIVE)
        logger.info(f"Listings: {total} total, {active} active")
        return True

    async def seed(self, owner_id: uuid.UUID) -> List[Property]:
        """
        Insert the sample listings for an existing profile.

        Args:
            owner_id: Profile that will own the listings

        Returns:
            Created listings

        Raises:
            RuntimeError: If the profile does not exist
        """
        async with AsyncSessionLocal() as session:
            owner = (await session.execute(
                select(Profile).where(Profile.id == owner_id)
            )).scalar_one_or_none()
            if owner is None:
                raise RuntimeError(f"Profile {owner_id} not found; sign up first, then seed with its id")

            repo = PropertyRepository(session)
            created = []
            for sample in SAMPLE_PROPERTIES:
                property_obj = await repo.create(build_sample_listing(sample, owner_id))
                logger.info(f"Seeded {property_obj.title} ({property_obj.city}, {property_obj.state})")
                created.append(property_obj)
            return created


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SubTo Marketplace database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create-tables", help="Create missing tables")

    reset_parser = subparsers.add_parser("reset", help="Drop and recreate all tables (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    subparsers.add_parser("check", help="Check connectivity and count listings")

    seed_parser = subparsers.add_parser("seed", help="Insert sample subject-to listings")
    seed_parser.add_argument("--owner-id", type=uuid.UUID, required=True, help="Profile ID owning the listings")

    return parser


async def run(args: argparse.Namespace) -> int:
    manager = DatabaseManager()
    try:
        if args.command == "create-tables":
            await manager.create()
        elif args.command == "reset":
            await manager.reset()
        elif args.command == "check":
            if not await manager.check():
                return 1
        elif args.command == "seed":
            created = await manager.seed(args.owner_id)
            logger.info(f"Seeded {len(created)} listings")
        return 0
    finally:
        await close_db_connection()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "reset":
        if not args.confirm:
            print("Database reset requires --confirm flag")
            return 1
        if settings.environment not in ("development", "testing"):
            print(f"Database reset is not allowed in {settings.environment}")
            return 1

    logger.info(f"Environment: {settings.environment}")
    try:
        return asyncio.run(run(args))
    except Exception as e:
        logger.error(f"Command '{args.command}' failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
