"""Seed database with demo suppliers, orders, targets and incentives."""
from datetime import datetime
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone


class Command(BaseCommand):
    help = "Seed database with users, supplier companies, products, orders, targets and incentives"

    DEMO_USERS = [
        {"email": "admin@distribution.ng", "first_name": "Admin", "last_name": "System", "role": "SUPER_ADMIN", "password": "admin123!"},
        {"email": "dist.admin@distribution.ng", "first_name": "Ngozi", "last_name": "Okafor", "role": "DISTRIBUTION_ADMIN", "password": "distadmin123!"},
        {"email": "rep1@distribution.ng", "first_name": "Tunde", "last_name": "Adeyemi", "role": "DISTRIBUTION_SALES_REP", "password": "salesrep123!"},
        {"email": "transport@distribution.ng", "first_name": "Musa", "last_name": "Bello", "role": "TRANSPORT_ADMIN", "password": "transport123!"},
    ]

    DEMO_SUPPLIERS = [
        {"name": "Nigerian Bottling Company", "code": "NBC", "payment_terms": "NET_30", "products": [
            ("NBC-CSD-001", "Coke 50cl x12", "CSD", 80, "3500.00"),
            ("NBC-CSD-002", "Fanta Orange 50cl x12", "CSD", 80, "3400.00"),
            ("NBC-WAT-001", "Eva Water 75cl x12", "WATER", 100, "1800.00"),
        ]},
        {"name": "Seven-Up Bottling Company", "code": "SBC", "payment_terms": "NET_15", "products": [
            ("SBC-CSD-001", "7Up 50cl x12", "CSD", 80, "3300.00"),
            ("SBC-WAT-001", "Aquafina 75cl x12", "WATER", 100, "1700.00"),
            ("SBC-ED-001", "Sting Energy 40cl x12", "ED", 90, "3600.00"),
        ]},
        {"name": "Chi Limited", "code": "CHI", "payment_terms": "CASH", "products": [
            ("CHI-JUI-001", "Chivita 100% 1L x10", "JUICE", 60, "9500.00"),
            ("CHI-JUI-002", "Hollandia Yoghurt 1L x10", "JUICE", 60, "11000.00"),
        ]},
    ]

    def add_arguments(self, parser):
        parser.add_argument("--flush", action="store_true", help="Delete existing demo data first")
        parser.add_argument("--year", type=int, default=None, help="Year to seed targets for (default: current year)")
        parser.add_argument("--month", type=int, default=None, help="Month to seed targets for (default: current month)")

    def handle(self, *args, **options):
        today = timezone.localdate()
        year = options["year"] or today.year
        month = options["month"] or today.month

        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            self._flush()

        self.stdout.write("Seeding data...")
        with transaction.atomic():
            users = self._create_users()
            suppliers = self._create_suppliers()
            orders = self._create_orders(suppliers, year, month)
            targets, incentives = self._create_targets(suppliers, year, month, users[1])

        self.stdout.write(self.style.SUCCESS(
            f"Seed complete: {len(users)} users, {len(suppliers)} suppliers, "
            f"{orders} orders, {targets} targets, {incentives} incentives for {year}-{month:02d}"
        ))

    def _flush(self):
        from distribution.models import DistributionOrder, DistributionOrderItem
        from suppliers.models import Product, SupplierCompany
        from targets.models import SupplierIncentive, SupplierTarget

        for model in [SupplierIncentive, SupplierTarget, DistributionOrderItem,
                      DistributionOrder, Product, SupplierCompany]:
            count = model.objects.count()
            model.objects.all().delete()
            self.stdout.write(f"  Deleted {count} {model.__name__}")

    def _create_users(self):
        from accounts.models import User

        users = []
        for data in self.DEMO_USERS:
            data = dict(data)
            password = data.pop("password")
            user, created = User.objects.get_or_create(email=data["email"], defaults=data)
            if created:
                user.set_password(password)
                user.save(update_fields=["password"])
            users.append(user)
        return users

    def _create_suppliers(self):
        from suppliers.models import Product, SupplierCompany

        suppliers = []
        for data in self.DEMO_SUPPLIERS:
            supplier, _ = SupplierCompany.objects.get_or_create(
                code=data["code"],
                defaults={"name": data["name"], "payment_terms": data["payment_terms"]},
            )
            for product_no, name, category, per_pallet, price in data["products"]:
                Product.objects.get_or_create(
                    product_no=product_no,
                    defaults={
                        "supplier_company": supplier,
                        "name": name,
                        "category": category,
                        "packs_per_pallet": per_pallet,
                        "price_per_pack": Decimal(price),
                    },
                )
            suppliers.append(supplier)
        return suppliers

    def _create_orders(self, suppliers, year, month):
        from distribution.models import DistributionOrder, DistributionOrderItem

        created = 0
        for index, supplier in enumerate(suppliers, start=1):
            products = list(supplier.products.all())
            for day in (3, 10, 17, 24):
                order_number = f"DO-{year}{month:02d}-{supplier.code}-{day:02d}"
                if DistributionOrder.objects.filter(order_number=order_number).exists():
                    continue
                quantities = [(product, 20 * index + day) for product in products]
                amount = sum((Decimal(qty) * product.price_per_pack for product, qty in quantities), Decimal("0"))
                order = DistributionOrder.objects.create(
                    order_number=order_number,
                    supplier_company=supplier,
                    customer_name=f"Retailer {day}",
                    total_packs=sum(qty for _, qty in quantities),
                    original_amount=amount,
                    final_amount=amount,
                    amount_paid=amount,
                    payment_status=DistributionOrder.PaymentStatus.CONFIRMED,
                    status=DistributionOrder.Status.DELIVERED,
                    created_at=timezone.make_aware(datetime(year, month, day, 10, 0)),
                )
                for product, qty in quantities:
                    DistributionOrderItem.objects.create(
                        order=order, product=product, quantity=qty, unit_price=product.price_per_pack,
                    )
                created += 1
        return created

    def _create_targets(self, suppliers, year, month, actor):
        from targets import services
        from targets.models import SupplierIncentive, SupplierTarget

        targets = incentives = 0
        for index, supplier in enumerate(suppliers, start=1):
            total = 1000 * index
            if not SupplierTarget.objects.filter(supplier_company=supplier, year=year, month=month).exists():
                services.create_target(
                    supplier_id=supplier.pk,
                    year=year,
                    month=month,
                    total_packs_target=total,
                    weekly_targets=[total // 4] * 3 + [total - 3 * (total // 4)],
                    actor=actor,
                )
                targets += 1
            if not SupplierIncentive.objects.filter(supplier_company=supplier, year=year, month=month).exists():
                services.create_incentive(
                    supplier_id=supplier.pk,
                    year=year,
                    month=month,
                    incentive_percentage=Decimal("2.50") + index,
                    actor=actor,
                )
                incentives += 1
        return targets, incentives
