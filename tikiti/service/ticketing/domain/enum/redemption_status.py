from enum import StrEnum


class RedemptionStatus(StrEnum):
    VALID = 'valid'
    ALREADY_USED = 'already_used'
    NOT_FOUND = 'not_found'
    ERROR = 'error'
