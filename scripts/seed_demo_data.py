"""
Seed script: populate the database with a demo company, parties, invoices and ledger entries.

What it creates:
- Company profile (GSTIN and state code included).
- Parties (default 8) spread over a few states.
- Sales invoices (default 20), each with its paired Sales ledger entry.
- Receipts (credits) against roughly half of the invoices.

Everything goes through the accounting store and workflows, so numbering and
invoice/ledger pairing follow the same rules as the API.

Run with the same environment as the API (DATABASE_URL or POSTGRES_*):
    python scripts/seed_demo_data.py --company-name "Sharma Traders" --parties 8 --invoices 20

Note: This is intended for development environments only.
"""

# Add project root to sys.path so `app.*` imports work even if CWD changes
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse
import asyncio
import random
from datetime import date, timedelta
from decimal import Decimal

from app.database.database import AsyncSessionLocal, async_engine, create_tables
from app.modules.accounting import workflows
from app.modules.accounting.store import AccountingStore
from app.modules.company.schemas import CompanyIn
from app.modules.invoices.schemas import InvoiceCreate, InvoiceItemIn
from app.modules.ledger.models import VoucherType
from app.modules.ledger.schemas import LedgerEntryCreate, TransactionType
from app.modules.parties.schemas import PartyCreate


PARTY_NAMES = [
    "Gupta Enterprises", "Patel Agro Foods", "Reddy Distributors", "Kumar & Sons",
    "Shree Balaji Traders", "Nair Spices", "Singh Wholesale", "Desai Commodities",
    "Mehta Rice Mills", "Joshi Provision Store", "Iyer Mart", "Verma Pulses",
]
PLACES = [
    ("Maharashtra", "Pune"), ("Gujarat", "Ahmedabad"), ("Karnataka", "Bengaluru Urban"),
    ("Tamil Nadu", "Chennai"), ("Kerala", "Ernakulam"), ("Delhi", "New Delhi"),
]
PRODUCTS = [
    ("Basmati Rice", "kg", 95), ("Toor Dal", "kg", 140), ("Sugar", "kg", 42),
    ("Wheat Flour", "kg", 38), ("Groundnut Oil", "ltr", 180), ("Turmeric Powder", "kg", 220),
    ("Jaggery", "kg", 60), ("Chana Dal", "kg", 90),
]


def pick(seq):
    return random.choice(seq)


async def seed_company(store: AccountingStore, name: str):
    form = CompanyIn(
        name=name,
        address=["12, Market Yard", "Gultekdi"],
        gstin="27AAPFU0939F1ZV",
        state="Maharashtra",
    )
    return await store.set_company(form.to_company(store.company.id), create_if_missing=True)


async def seed_parties(store: AccountingStore, count: int):
    parties = []
    for name in PARTY_NAMES[:count]:
        state, district = pick(PLACES)
        party = await workflows.register_party(store, PartyCreate(
            name=name,
            email=f"accounts@{name.split()[0].lower()}.example.com",
            address=f"{random.randint(1, 250)}, Main Road\n{district}",
            district=district,
            state=state,
        ))
        parties.append(party)
    return parties


async def seed_invoices(store: AccountingStore, parties, count: int, start: date):
    created = 0
    for n in range(count):
        party = pick(parties)
        lines = []
        for description, unit, base_rate in random.sample(PRODUCTS, k=random.randint(1, 4)):
            lines.append(InvoiceItemIn(
                description=description,
                quantity=Decimal(random.randint(5, 200)),
                unit=unit,
                rate=Decimal(base_rate + random.randint(-5, 15)),
            ))
        invoice_date = start + timedelta(days=n * 3)
        invoice = await workflows.create_invoice(store, InvoiceCreate(
            party_id=party.id,
            date=invoice_date,
            items=lines,
            mode_of_payment=pick(["Credit", "Cash", "NEFT"]),
            destination=party.district,
        ))
        created += 1

        if random.random() < 0.5:
            await workflows.record_ledger_entry(store, LedgerEntryCreate(
                party_id=party.id,
                date=invoice_date + timedelta(days=random.randint(1, 10)),
                voucher_type=VoucherType.RECEIPT,
                transaction_type=TransactionType.CREDIT,
                amount=invoice.total_amount,
            ))
    return created


async def run(args):
    if args.create_tables:
        await create_tables(async_engine)

    store = AccountingStore(AsyncSessionLocal)
    await store.load_all()
    if store.last_error:
        raise SystemExit(f"Could not load existing data: {store.last_error}")

    try:
        company = await seed_company(store, args.company_name)
        print(f"Company: {company.name} ({company.state_code})")

        print("Creating parties...")
        parties = await seed_parties(store, min(args.parties, len(PARTY_NAMES)))
        print(f"Parties created: {len(parties)}")

        print("Creating invoices (with Sales ledger entries) and receipts...")
        created = await seed_invoices(store, parties, args.invoices, date.today() - timedelta(days=args.invoices * 3))
        print(f"Invoices created: {created}")

        print("\nSeed completed.")
        print(f"  Invoices:       {len(store.invoices)}")
        print(f"  Ledger entries: {len(store.ledger_entries)}")
        print(f"  Next invoice:   {store.get_next_invoice_no()}")
    finally:
        await async_engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Seed GST invoice and ledger demo data")
    parser.add_argument("--company-name", default="Sharma Traders")
    parser.add_argument("--parties", type=int, default=8)
    parser.add_argument("--invoices", type=int, default=20)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
    parser.add_argument("--create-tables", action="store_true", help="Create missing tables first")
    args = parser.parse_args()

    if args.seed is not None:
        random.seed(args.seed)

    asyncio.run(run(args))


if __name__ == "__main__":
    main()
