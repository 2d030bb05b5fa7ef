import json
from decimal import Decimal
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.catalog.container import build_product_service
from apps.catalog.repositories import ProductRepository
from apps.common import get_logger

logger = get_logger(__name__).bind(component="common", layer="command")

REQUIRED_FIELDS = ("name", "price", "description", "category")


def _product_fields(entry):
    missing = [f for f in REQUIRED_FIELDS if entry.get(f) in (None, "")]
    if missing:
        raise CommandError(f"Product entry {entry.get('name')!r} is missing: {', '.join(missing)}")
    fields = {
        "price": Decimal(str(entry["price"])),
        "description": entry["description"],
        "category": entry["category"],
        "options": entry.get("options") or {},
    }
    if entry.get("image"):
        fields["image"] = entry["image"]
    stock = entry.get("stockCount", entry.get("stock_count"))
    if stock is not None:
        fields["stock_count"] = int(stock)
    return fields


class Command(BaseCommand):
    help = "Load catalog products from a JSON fixture (upsert by product name)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--file",
            default=None,
            help="Path to the products JSON file (defaults to CATALOG_SEED_FILE)",
        )
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete existing products (and the cart lines pointing at them) first",
        )

    def handle(self, *args, **options):
        path = Path(options["file"] or settings.CATALOG_SEED_FILE)
        if not path.exists():
            raise CommandError(f"Seed file not found: {path}")
        try:
            entries = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CommandError(f"Seed file is not valid JSON: {exc}")
        if not isinstance(entries, list):
            raise CommandError("Seed file must contain a JSON array of products")

        products = ProductRepository()
        created = updated = 0
        with transaction.atomic():
            if options["flush"]:
                removed = products.delete_all()
                self.stdout.write(f"Flushed {removed} existing rows.")
            for entry in entries:
                _, was_created = products.upsert(entry.get("name"), **_product_fields(entry))
                if was_created:
                    created += 1
                else:
                    updated += 1

        build_product_service().invalidate_cache()
        logger.info("Catalog seeded", file=str(path), created=created, updated=updated)
        self.stdout.write(
            self.style.SUCCESS(f"Catalog seed completed: {created} created, {updated} updated.")
        )
