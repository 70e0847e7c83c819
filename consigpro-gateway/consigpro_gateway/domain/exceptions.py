"""Domain-specific exceptions"""

EXTRACTION_FAILED_MESSAGE = (
    "Erro ao processar PDF. Certifique-se de que os campos 'VALOR BASE PENSÃO I.R.' "
    "e as tabelas de empréstimos estão visíveis."
)

MISSING_PAYSLIP_MESSAGE = (
    "O Contracheque é obrigatório para extrair a base de cálculo (PENSÃO I.R / BASE I.R)."
)


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MissingDocumentError(DomainException):
    """Primary document (contracheque) was not supplied"""

    def __init__(self, message: str = MISSING_PAYSLIP_MESSAGE):
        super().__init__(message)


class ExtractionError(DomainException):
    """Extraction service failed or returned unusable data"""

    def __init__(self, message: str = EXTRACTION_FAILED_MESSAGE):
        super().__init__(message)


class AnalysisSupersededError(DomainException):
    """A newer analysis request for the same session won the race"""

    pass


class AnalysisNotFoundError(DomainException):
    """No current analysis is held for the session"""

    pass
