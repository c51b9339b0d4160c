import os

from hypothesis import HealthCheck, settings

settings.register_profile(
    "ci", max_examples=50, suppress_health_check=[HealthCheck.too_slow]
)
settings.register_profile("dev", max_examples=200)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
