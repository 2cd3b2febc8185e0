"""
Plan Catalog

Purchasable plans. Each plan pins the model a session may call and the price
per number of hours bought.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel

MIN_HOURS = 1
MAX_HOURS = 4


class Plan(BaseModel):
    id: str
    name: str
    model_name: str
    display_model: str
    prices: Dict[int, int]  # hours -> price

    def price_for(self, hours: int) -> Optional[int]:
        return self.prices.get(hours)


PLANS: List[Plan] = [
    Plan(
        id="basic",
        name="Basic",
        model_name="google/gemini-2.5-flash-lite",
        display_model="Gemini 2.5 Flash Lite",
        prices={1: 10, 2: 18, 3: 24, 4: 30},
    ),
    Plan(
        id="standard",
        name="Standard",
        model_name="google/gemini-2.5-flash",
        display_model="Gemini 2.5 Flash",
        prices={1: 25, 2: 45, 3: 60, 4: 75},
    ),
    Plan(
        id="pro",
        name="Pro",
        model_name="google/gemini-2.5-pro",
        display_model="Gemini 2.5 Pro",
        prices={1: 30, 2: 55, 3: 75, 4: 95},
    ),
]


def get_plan(plan_id: str) -> Optional[Plan]:
    for plan in PLANS:
        if plan.id == plan_id:
            return plan
    return None
