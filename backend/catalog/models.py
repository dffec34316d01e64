from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Sum
from django.utils.translation import gettext_lazy as _


class Service(models.Model):
    name = models.CharField(max_length=200, unique=True, help_text=_("Name of the service."))
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, blank=True)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Price charged per unit of this service."),
    )
    estimated_duration_days = models.PositiveIntegerField(default=0)
    estimated_duration_hours = models.PositiveSmallIntegerField(
        default=0, validators=[MaxValueValidator(23)]
    )
    labor_cost = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    is_available = models.BooleanField(default=True)
    note = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Service")
        verbose_name_plural = _("Services")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["category", "is_available"], name="service_category_avail_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def estimated_duration(self):
        """(days, hours) pair used by the duration aggregator."""
        return self.estimated_duration_days, self.estimated_duration_hours

    @property
    def material_cost(self) -> Decimal:
        total = self.materials.aggregate(total=Sum("cost"))["total"]
        return total or Decimal("0.00")

    @property
    def profit(self) -> Decimal:
        return self.price - (self.material_cost + self.labor_cost)


class ServiceMaterial(models.Model):
    service = models.ForeignKey(
        Service, on_delete=models.CASCADE, related_name="materials"
    )
    name = models.CharField(max_length=200)
    cost = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.name} ({self.service.name})"
