"""Common constants shared across SatRate modules."""

KEY_PREFIX = "submission:"
LIST_PAGE_SIZE = 1000

RATING_FIELDS = (
    "onboardingSmooth",
    "docEffective",
    "docUseLater",
    "docClear",
    "docComplete",
    "docReferToOthers",
    "docEasyIntuitive",
    "usabilityReflected",
    "usabilityCommunication",
    "usabilityTailored",
    "supportFeltSupported",
    "supportResponsive",
    "supportHadResources",
    "supportSolvedIssues",
)
RATING_VALUES = (1, 2, 3, 4, 5)

LENGTH_FIELDS = ("onboardingLength",)
LENGTH_OPTIONS = ("short", "appropriate", "long")

NOT_CONFIGURED_MESSAGE = "KV not configured"
