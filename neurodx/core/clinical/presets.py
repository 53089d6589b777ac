"""
Preset sessions.

Quick-fill snapshots in the store's own shape (camelCase keys), one per
pattern the rule table knows about.  Used by the demo runner and as
realistic fixtures in tests.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, List

from neurodx.utils import UnknownPresetError


def empty_session() -> Dict[str, Any]:
    """A blank session as the form layer creates it."""
    return {
        "triage": {"acuteOnset": False, "painful": False, "neuroSx": False, "trauma": False},
        "pupils": {
            "odLight": None, "osLight": None, "odDark": None, "osDark": None,
            "odLightRxn": "", "osLightRxn": "",
            "dilationLag": False, "anhidrosis": False,
            "lightNearDissociation": False, "vermiform": False,
            "anticholinergicExposure": False, "sympathomimeticExposure": False,
        },
        "eom": {
            "diplopia": False, "ptosis": False, "fatigable": False, "painOnMovement": False,
            "abductionDeficit": None, "adductionDeficit": None, "verticalLimitation": None,
            "comitant": None, "notes": "",
        },
        "visualFields": {
            "testType": "", "reliability": "", "complaint": False, "newDefect": False,
            "homonymous": False, "bitemporal": False, "altitudinal": False,
            "centralScotoma": False, "laterality": "",
            "respectsVerticalMeridian": None, "respectsHorizontalMeridian": None,
            "congruity": "", "notes": "",
        },
        "meta": {"activePatientLabel": "", "updatedAt": None},
    }


def _with(**namespaces: Dict[str, Any]) -> Dict[str, Any]:
    session = empty_session()
    for ns, values in namespaces.items():
        session[ns].update(values)
    return session


# equal pupils in both lighting conditions
_NORMAL_PUPILS = {"odLight": 3.0, "osLight": 3.0, "odDark": 6.0, "osDark": 6.0}

_PRESETS: Dict[str, Dict[str, Any]] = {
    "normal": _with(pupils=_NORMAL_PUPILS),
    "physiologic": _with(pupils={"odLight": 3.3, "osLight": 3.0, "odDark": 6.3, "osDark": 6.0}),
    "horner": _with(
        triage={"acuteOnset": True},
        pupils={"odLight": 3.5, "osLight": 3.2, "odDark": 6.5, "osDark": 4.5, "dilationLag": True},
        eom={"ptosis": True},
    ),
    "third_nerve": _with(
        triage={"acuteOnset": True, "painful": True},
        pupils={"odLight": 6.5, "osLight": 3.0, "odDark": 7.0, "osDark": 6.0},
        eom={"ptosis": True, "diplopia": True, "adductionDeficit": True, "comitant": False},
    ),
    "adie": _with(
        pupils={"odLight": 5.5, "osLight": 3.0, "odDark": 6.5, "osDark": 6.0,
                "lightNearDissociation": True, "vermiform": True},
    ),
    "pharmacologic": _with(
        pupils={"odLight": 8.0, "osLight": 3.0, "odDark": 8.0, "osDark": 6.0,
                "anticholinergicExposure": True},
    ),
    "cn6": _with(
        pupils=_NORMAL_PUPILS,
        eom={"diplopia": True, "abductionDeficit": True, "comitant": False},
    ),
    "chiasmal": _with(
        pupils=_NORMAL_PUPILS,
        visualFields={"testType": "24-2", "reliability": "good", "bitemporal": True,
                      "respectsVerticalMeridian": True, "laterality": "binocular"},
    ),
    "retrochiasmal": _with(
        pupils=_NORMAL_PUPILS,
        visualFields={"testType": "24-2", "reliability": "good", "homonymous": True,
                      "respectsVerticalMeridian": True, "laterality": "binocular",
                      "congruity": "high"},
    ),
    "optic_nerve": _with(
        pupils=_NORMAL_PUPILS,
        visualFields={"testType": "24-2", "reliability": "good", "altitudinal": True,
                      "respectsHorizontalMeridian": True, "laterality": "mono"},
    ),
    "central_scotoma": _with(
        pupils=_NORMAL_PUPILS,
        visualFields={"testType": "10-2", "reliability": "borderline", "centralScotoma": True,
                      "laterality": "mono", "complaint": True, "newDefect": True},
    ),
}


def preset_names() -> List[str]:
    return list(_PRESETS)


def get_preset(name: str) -> Dict[str, Any]:
    """Return a fresh copy of a preset session; callers may mutate it."""
    try:
        return copy.deepcopy(_PRESETS[name])
    except KeyError:
        raise UnknownPresetError(name, available=preset_names()) from None
