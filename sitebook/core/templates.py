from pathlib import Path
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from fastapi.templating import Jinja2Templates

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

def format_date_filter(value, format_str="%d/%m/%Y"):
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        try:
            value = datetime.strptime(value, "%Y-%m-%d")
        except ValueError:
            return value
    return value.strftime(format_str)

templates.env.filters["format_date"] = format_date_filter

def format_month_filter(value, format_str="%b/%Y"):
    # "2025-10" -> "Oct/2025"
    if not value:
        return ""
    try:
        return datetime.strptime(value, "%Y-%m").strftime(format_str)
    except ValueError:
        return value

templates.env.filters["format_month"] = format_month_filter

def group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail

def format_inr_filter(value, decimals=2):
    if value is None or value == "":
        value = 0
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return value
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):.{decimals}f}"
    whole, _, frac = text.partition(".")
    grouped = group_indian(whole)
    return f"{sign}{grouped}.{frac}" if frac else f"{sign}{grouped}"

templates.env.filters["inr"] = format_inr_filter
templates.env.globals["today"] = date.today
