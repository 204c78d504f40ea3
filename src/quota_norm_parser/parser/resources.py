"""Consumption token parsing and norm-to-resource relationship building."""

from __future__ import annotations

from quota_norm_parser.models import ConsumptionValue, ResourceBlock, ResourceConsumption
from quota_norm_parser.text_utils import fold_parentheses

CATEGORY_CODES = {
    "人工": 1,
    "材料": 2,
    "机械": 3,
}
PRIMARY_CATEGORY_CODE = 5
EMPTY_TOKENS = frozenset({"", "-", "0"})


def parse_consumption(token: str) -> ConsumptionValue:
    """
    Parse one consumption token without touching its numeric text.

    `(2.0)` marks a primary resource and yields value `2.0`; empty, `-` and
    `0` all yield value `0`.
    """
    original = token or ""
    text = original.strip()
    if text in EMPTY_TOKENS:
        return ConsumptionValue(value="0", is_primary=False, original=original)

    folded = fold_parentheses(text)
    is_primary = len(folded) >= 2 and folded.startswith("(") and folded.endswith(")")
    value = folded[1:-1].strip() if is_primary else text
    return ConsumptionValue(value=value, is_primary=is_primary, original=original)


def category_code(category: str, is_primary: bool) -> int:
    """Primary resources are always code 5, whatever row they were tabulated in."""
    if is_primary:
        return PRIMARY_CATEGORY_CODE
    return CATEGORY_CODES.get(category, PRIMARY_CATEGORY_CODE)


def build_resource_consumptions(code: str, blocks: list[ResourceBlock]) -> list[ResourceConsumption]:
    resources: list[ResourceConsumption] = []
    for block in blocks:
        for index, name in enumerate(block.names):
            consumptions = block.consumptions[index] if index < len(block.consumptions) else {}
            parsed = consumptions.get(code)
            if parsed is None or parsed.value in EMPTY_TOKENS:
                continue
            resources.append(
                ResourceConsumption(
                    name=name,
                    unit=block.units[index] if index < len(block.units) else "",
                    consumption=parsed.value,
                    is_primary=parsed.is_primary,
                    category=block.category,
                    category_code=category_code(block.category, parsed.is_primary),
                )
            )
    return resources


def consumption_map(tokens_by_code: dict[str, list[str]], index: int) -> dict[str, ConsumptionValue]:
    """Pick the token at `index` from every norm column and keep the non-zero ones."""
    result: dict[str, ConsumptionValue] = {}
    for code, tokens in tokens_by_code.items():
        if index >= len(tokens):
            continue
        token = tokens[index]
        if token.strip() in EMPTY_TOKENS:
            continue
        result[code] = parse_consumption(token)
    return result

