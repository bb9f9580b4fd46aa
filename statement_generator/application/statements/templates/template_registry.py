"""Registry of institution templates."""

from typing import Dict, List

from statement_generator.core.exceptions import UnknownInstitutionError

from .base_template import TableTemplate
from .axis_template import AxisTemplate
from .bandhan_template import BandhanTemplate
from .central_template import CentralTemplate
from .hdfc_template import HDFCTemplate
from .icici_template import ICICITemplate
from .idfc_template import IDFCTemplate
from .pnb_template import PNBTemplate
from .sbi_template import SBITemplate


class TemplateRegistry:
    """Lookup of layout templates by institution code."""

    # Templates are stateless, one shared instance each
    _templates: Dict[str, TableTemplate] = {
        template.bank_id: template
        for template in (
            PNBTemplate(),
            BandhanTemplate(),
            CentralTemplate(),
            ICICITemplate(),
            SBITemplate(),
            AxisTemplate(),
            HDFCTemplate(),
            IDFCTemplate(),
        )
    }

    @classmethod
    def get_template(cls, bank_id: str) -> TableTemplate:
        """
        Get the template for an institution code.

        Args:
            bank_id: Institution code (case-insensitive)

        Returns:
            The institution's TableTemplate

        Raises:
            UnknownInstitutionError: If no template is registered for the code
        """
        template = cls._templates.get((bank_id or "").strip().upper())
        if template is None:
            raise UnknownInstitutionError(bank_id, supported=cls.get_supported_banks())
        return template

    @classmethod
    def get_supported_banks(cls) -> List[str]:
        return list(cls._templates.keys())
