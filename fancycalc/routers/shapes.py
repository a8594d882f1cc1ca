from fastapi import APIRouter, HTTPException

from .. import schemas
from ..shapes.registry import SHAPE_LIBRARY, list_profiles

router = APIRouter(prefix="/shapes", tags=["shapes"])


@router.get("/")
def list_shapes():
    return {"shapes": list_profiles()}


@router.get("/{shape_name}", response_model=schemas.ShapeProfileOut)
def get_shape(shape_name: str):
    """Field rules and dropdown options for one shape profile."""
    profile = SHAPE_LIBRARY.get(shape_name)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"Unknown shape: {shape_name}")
    return {
        "name": profile.name,
        "fields": [
            {
                "name": name,
                "min": rule.min,
                "max": rule.max,
                "step": rule.step,
                "source_key": rule.source_key,
                "rounding": rule.rounding,
                "numeric": rule.numeric,
                "options": rule.options(),
            }
            for name, rule in profile.fields.items()
        ],
    }
