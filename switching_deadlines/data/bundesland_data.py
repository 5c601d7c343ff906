"""
Display names of the German federal states.
"""

from switching_deadlines.data.schemas import Bundesland

BUNDESLAND_NAMES = {
    Bundesland.BB: "Brandenburg",
    Bundesland.BE: "Berlin",
    Bundesland.BW: "Baden-Württemberg",
    Bundesland.BY: "Bayern",
    Bundesland.HB: "Bremen",
    Bundesland.HE: "Hessen",
    Bundesland.HH: "Hamburg",
    Bundesland.MV: "Mecklenburg-Vorpommern",
    Bundesland.NI: "Niedersachsen",
    Bundesland.NW: "Nordrhein-Westfalen",
    Bundesland.RP: "Rheinland-Pfalz",
    Bundesland.SH: "Schleswig-Holstein",
    Bundesland.SL: "Saarland",
    Bundesland.SN: "Sachsen",
    Bundesland.ST: "Sachsen-Anhalt",
    Bundesland.TH: "Thüringen",
}
