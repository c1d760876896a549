from __future__ import annotations

from .materials import MaterialProfile

# Allowed 24-hour swings. RH general limit is the Bizot Protocol (+/-10 %).
TEMP_LIMIT_GENERAL = 5.0
TEMP_LIMIT_SENSITIVE = 3.0
TEMP_LIMIT_VERY_SENSITIVE = 2.0

RH_LIMIT_GENERAL = 10.0
RH_LIMIT_MODERATE = 7.0
RH_LIMIT_SENSITIVE = 5.0
RH_LIMIT_VERY_SENSITIVE = 4.0
RH_LIMIT_CRITICAL = 3.0


def _temperature_warnings(temp_fluc: float, profile: MaterialProfile) -> list[str]:
    name = profile.name.lower()
    if profile.priority("mechanical_decay") in ("critical", "very-high"):
        if temp_fluc > TEMP_LIMIT_SENSITIVE:
            return [
                f"Temperature fluctuation of ±{temp_fluc:g}°F exceeds recommended "
                f"±{TEMP_LIMIT_SENSITIVE:g}°F for {name}. Dimensional changes may "
                "cause mechanical damage."
            ]
        if temp_fluc > TEMP_LIMIT_VERY_SENSITIVE:
            return [
                f"Temperature fluctuation of ±{temp_fluc:g}°F is at the upper "
                "acceptable limit for sensitive materials."
            ]
        return []
    if temp_fluc > TEMP_LIMIT_GENERAL:
        return [
            f"Temperature fluctuation of ±{temp_fluc:g}°F exceeds recommended "
            "±4-5°F daily variation. This accelerates chemical degradation."
        ]
    return []


def _rh_warnings(rh_fluc: float, profile: MaterialProfile) -> list[str]:
    name = profile.name.lower()
    priority = profile.priority("mechanical_decay")
    if priority == "critical":
        if rh_fluc > RH_LIMIT_VERY_SENSITIVE:
            return [
                f"RH fluctuation of ±{rh_fluc:g}% is critical for {name}. Keep "
                f"below ±{RH_LIMIT_VERY_SENSITIVE:g}% to prevent cracking, warping, "
                "and delamination."
            ]
        if rh_fluc > RH_LIMIT_CRITICAL:
            return [
                f"RH fluctuation of ±{rh_fluc:g}% is approaching the safe limit. "
                "Monitor closely for dimensional changes."
            ]
        return []
    if priority == "very-high":
        if rh_fluc > RH_LIMIT_SENSITIVE:
            return [
                f"RH fluctuation of ±{rh_fluc:g}% may cause dimensional stress in "
                f"{name}. Recommended: ±{RH_LIMIT_SENSITIVE:g}% or less per 24 hours."
            ]
        return []
    if rh_fluc > RH_LIMIT_GENERAL:
        return [
            f"RH fluctuation of ±{rh_fluc:g}% exceeds Bizot Protocol "
            f"recommendation of ±{RH_LIMIT_GENERAL:g}% per 24 hours."
        ]
    if rh_fluc > RH_LIMIT_MODERATE:
        return [
            f"RH fluctuation of ±{rh_fluc:g}% is elevated. While within acceptable "
            "limits, lower fluctuation improves stability."
        ]
    return []


def assess_fluctuation(
    temp_fluc: float | None, rh_fluc: float | None, profile: MaterialProfile
) -> dict:
    """Classify 24-hour temperature/RH swings for a material.

    Returns a flag dict with status empty|warning|success|ok.
    """
    if temp_fluc is None and rh_fluc is None:
        return {
            "status": "empty",
            "messages": [],
            "message": (
                "Enter 24-hour fluctuation values to assess environmental "
                "stability for this material type."
            ),
        }

    warnings: list[str] = []
    if temp_fluc is not None:
        warnings += _temperature_warnings(temp_fluc, profile)
    if rh_fluc is not None:
        warnings += _rh_warnings(rh_fluc, profile)
    if warnings:
        return {"status": "warning", "messages": warnings, "message": " ".join(warnings)}

    good = []
    if temp_fluc is not None and temp_fluc <= TEMP_LIMIT_SENSITIVE:
        good.append(f"Temperature stability (±{temp_fluc:g}°F) is excellent.")
    if rh_fluc is not None and rh_fluc <= RH_LIMIT_SENSITIVE:
        good.append(f"RH stability (±{rh_fluc:g}%) is excellent.")
    if good:
        return {"status": "success", "messages": good, "message": " ".join(good)}

    msg = (
        "Environmental fluctuation levels are within acceptable ranges for "
        f"{profile.name.lower()}."
    )
    return {"status": "ok", "messages": [msg], "message": msg}
