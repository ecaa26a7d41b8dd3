from .step_10_preflight import PreflightStep
from .step_20_configure_repos import ConfigureReposStep
from .step_30_install_helpers import InstallHelpersStep
from .step_40_plan_packages import PlanPackagesStep
from .step_50_install_packages import InstallPackagesStep
from .step_60_install_flatpaks import InstallFlatpaksStep
from .step_70_configure_services import ConfigureServicesStep
from .step_80_write_tuning import WriteTuningStep
from .step_90_summary import SummaryStep

__all__ = [
    "PreflightStep",
    "ConfigureReposStep",
    "InstallHelpersStep",
    "PlanPackagesStep",
    "InstallPackagesStep",
    "InstallFlatpaksStep",
    "ConfigureServicesStep",
    "WriteTuningStep",
    "SummaryStep",
]
