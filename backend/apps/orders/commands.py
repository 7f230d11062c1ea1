from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class OrderCreateCommand:
    template_ids: List[str] = field(default_factory=list)
    coupon_code: Optional[str] = None

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "OrderCreateCommand":
        data = dict(payload or {})
        ids: List[str] = []
        for item in data.get("items") or []:
            raw = item.get("template_id") if isinstance(item, dict) else item
            value = str(raw or "").strip()
            # Each template is bought at most once per order
            if value and value not in ids:
                ids.append(value)
        code = str(data.get("coupon_code") or "").strip() or None
        return OrderCreateCommand(template_ids=ids, coupon_code=code)
