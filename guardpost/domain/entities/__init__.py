from guardpost.domain.entities.company import CompanyEntity

__all__ = ["CompanyEntity"]
