'''Declarative field rules.

A rule is a callable that takes a field value and returns an error message,
or None when the value is acceptable. Rules for one field are evaluated in
order and evaluation of that field stops at the first failure; every field
is always evaluated so the caller gets the full picture in one pass.
'''
import email_validator
import typing as t

Rule = t.Callable[[t.Any], str | None]
ValidationErrors = dict[str, list[str]]


def _is_empty(value: t.Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def required(message: str) -> Rule:
    def rule(value):
        return message if _is_empty(value) else None
    return rule


def length(min_len: int, max_len: int, message: str) -> Rule:
    '''Empty values are skipped, pair with `required` to forbid them'''
    def rule(value):
        if _is_empty(value):
            return None
        return None if min_len <= len(value) <= max_len else message
    return rule


def max_bytes(limit: int, message: str) -> Rule:
    '''UTF-8 encoded size, for limits set by byte-oriented libraries'''
    def rule(value):
        if _is_empty(value):
            return None
        return None if len(value.encode('utf-8')) <= limit else message
    return rule


def email_address(message: str) -> Rule:
    '''RFC 5322 address syntax with an internet-style domain. No DNS lookups'''
    def rule(value):
        if _is_empty(value):
            return None
        try:
            email_validator.validate_email(value, check_deliverability=False)
        except email_validator.EmailNotValidError:
            return message
        return None
    return rule


def one_of(allowed: t.Iterable[str], message: str) -> Rule:
    allowed = frozenset(allowed)
    def rule(value):
        if _is_empty(value):
            return None
        return None if value in allowed else message
    return rule


def when(condition: t.Callable[[t.Any], bool], *rules: Rule) -> Rule:
    '''Applies `rules` only if `condition(value)` holds'''
    def rule(value):
        if not condition(value):
            return None
        for inner in rules:
            if (message := inner(value)) is not None:
                return message
        return None
    return rule


def validate_fields(record: t.Any, field_rules: dict[str, list[Rule]]) -> ValidationErrors:
    errors: ValidationErrors = {}
    for field, rules in field_rules.items():
        value = getattr(record, field, None)
        for rule in rules:
            message = rule(value)
            if message is not None:
                errors.setdefault(field, []).append(message)
                break
    return errors
