from app_caisse.utils.currency import format_currency, parse_currency

__all__ = ['format_currency', 'parse_currency']
