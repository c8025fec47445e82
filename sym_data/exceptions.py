class SymDataException(Exception):
    pass


class SymDataInputException(SymDataException):
    pass


class WeaponNameNotFoundException(SymDataException):
    pass


class ExtractionRuleOrderError(SymDataException):
    pass
