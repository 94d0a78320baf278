"""Registry mapping report types to their mappers."""

from typing import Type

from dealer_pulse.models.records import ReportType

from .mappers import BaseMapper, InventoryMapper, LeadMapper, OpportunityMapper, SaleMapper


class MapperRegistry:
    """Provides the mapper for a classified report."""

    _mappers: dict[ReportType, Type[BaseMapper]] = {
        ReportType.LEADS: LeadMapper,
        ReportType.OPPORTUNITIES: OpportunityMapper,
        ReportType.SALES: SaleMapper,
        ReportType.INVENTORY: InventoryMapper,
    }

    @classmethod
    def get(cls, report_type: ReportType | str, **kwargs) -> BaseMapper:
        """Get a mapper instance. kwargs passed to mapper __init__."""
        mapper_cls = cls._mappers.get(ReportType(report_type))
        if not mapper_cls:
            raise ValueError(f"No mapper for report type: {report_type}. Available: {cls.available_types()}")
        return mapper_cls(**kwargs)

    @classmethod
    def available_types(cls) -> list[str]:
        """Return report types that have a mapper."""
        return [t.value for t in cls._mappers]
