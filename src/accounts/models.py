import uuid

from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """Custom manager for the User model that uses email as the unique identifier."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("An email address is required.")
        email = self.normalize_email(email)
        extra_fields.setdefault("is_active", True)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("role", User.Role.SUPER_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Dashboard user.

    Uses email as the unique identifier instead of a username.
    The role decides which division screens (distribution, transport,
    warehouse) the user may reach and whether supplier targets and
    incentives may be edited.
    """

    class Role(models.TextChoices):
        SUPER_ADMIN = "SUPER_ADMIN", "Super admin"
        DISTRIBUTION_ADMIN = "DISTRIBUTION_ADMIN", "Distribution admin"
        DISTRIBUTION_SALES_REP = "DISTRIBUTION_SALES_REP", "Distribution sales rep"
        TRANSPORT_ADMIN = "TRANSPORT_ADMIN", "Transport admin"
        TRANSPORT_STAFF = "TRANSPORT_STAFF", "Transport staff"
        WAREHOUSE_ADMIN = "WAREHOUSE_ADMIN", "Warehouse admin"
        WAREHOUSE_SALES_OFFICER = "WAREHOUSE_SALES_OFFICER", "Warehouse sales officer"
        CASHIER = "CASHIER", "Cashier"

    SUPPLIER_PERFORMANCE_VIEW_ROLES = frozenset({
        Role.SUPER_ADMIN,
        Role.DISTRIBUTION_ADMIN,
        Role.DISTRIBUTION_SALES_REP,
    })
    SUPPLIER_PERFORMANCE_EDIT_ROLES = frozenset({
        Role.SUPER_ADMIN,
        Role.DISTRIBUTION_ADMIN,
    })

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    email = models.EmailField(
        "email address",
        unique=True,
        error_messages={
            "unique": "A user with this email address already exists.",
        },
    )
    first_name = models.CharField("first name", max_length=150)
    last_name = models.CharField("last name", max_length=150)
    phone = models.CharField("phone", max_length=30, blank=True, default="")
    role = models.CharField(
        "role",
        max_length=30,
        choices=Role.choices,
        default=Role.DISTRIBUTION_SALES_REP,
        db_index=True,
    )
    is_active = models.BooleanField("active", default=True, db_index=True)
    is_staff = models.BooleanField("staff status", default=False)
    date_joined = models.DateTimeField("date joined", default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["first_name", "last_name"]

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["last_name", "first_name"]

    def __str__(self):
        return self.get_full_name() or self.email

    def get_full_name(self):
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name

    def get_short_name(self):
        return self.first_name

    # ------------------------------------------------------------------
    # Capability helpers
    # ------------------------------------------------------------------

    @property
    def can_view_supplier_performance(self):
        return self.is_superuser or self.role in self.SUPPLIER_PERFORMANCE_VIEW_ROLES

    @property
    def can_manage_supplier_performance(self):
        return self.is_superuser or self.role in self.SUPPLIER_PERFORMANCE_EDIT_ROLES

    @property
    def role_display(self):
        return self.get_role_display()
