"""UK SIC 2007 sections, keyed by the first two digits of a code."""

from pydantic import BaseModel, ConfigDict


class SICSection(BaseModel):
    """An inclusive range of two-digit SIC divisions and its section label."""

    model_config = ConfigDict(frozen=True)

    low: int
    high: int
    label: str

    def contains(self, division: int) -> bool:
        return self.low <= division <= self.high


SIC_SECTIONS: tuple[SICSection, ...] = tuple(
    SICSection(low=low, high=high, label=label)
    for low, high, label in (
        (1, 3, "A — Agriculture, Forestry & Fishing"),
        (5, 9, "B — Mining & Quarrying"),
        (10, 33, "C — Manufacturing"),
        (35, 35, "D — Electricity, Gas, Steam & Air Conditioning"),
        (36, 39, "E — Water Supply; Sewerage, Waste Management & Remediation"),
        (41, 43, "F — Construction"),
        (45, 47, "G — Wholesale & Retail Trade; Repair of Motor Vehicles & Motorcycles"),
        (49, 53, "H — Transportation & Storage"),
        (55, 56, "I — Accommodation & Food Service Activities"),
        (58, 63, "J — Information & Communication"),
        (64, 66, "K — Financial & Insurance Activities"),
        (68, 68, "L — Real Estate Activities"),
        (69, 75, "M — Professional, Scientific & Technical Activities"),
        (77, 82, "N — Administrative & Support Service Activities"),
        (84, 84, "O — Public Administration & Defence; Compulsory Social Security"),
        (85, 85, "P — Education"),
        (86, 88, "Q — Human Health & Social Work Activities"),
        (90, 93, "R — Arts, Entertainment & Recreation"),
        (94, 96, "S — Other Service Activities"),
        (97, 98, "T — Activities of Households as Employers; Undifferentiated Goods- & "
                 "Services-Producing Activities of Households for Own Use"),
        (99, 99, "U — Activities of Extraterritorial Organisations & Bodies"),
    )
)
