# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Live probe for a PHP runtime.

Runs the PHP CLI once with a small inline script that prints the detected
values as JSON. Same rules as any other subprocess we spawn: argument list,
no shell, captured output, hard timeout.

The script asks `extension_loaded()` about every required module on top of
listing loaded extensions, because some extensions register under a
different display name (opcache shows up as "Zend OPcache").
"""

import json
import subprocess

from pydantic import ValidationError

from hostcheck.config.schema import ProbeConfig, RequirementsConfig
from hostcheck.logging.logger import get_logger
from hostcheck.probe.exceptions import ProbeError
from hostcheck.probe.snapshot import RuntimeSnapshot

_logger = get_logger(__name__)

PROBE_SCRIPT = r"""
$query = json_decode($argv[1], true);
$extensions = array_merge(get_loaded_extensions(), get_loaded_extensions(true));
foreach ($query['modules'] as $module) {
    if (extension_loaded($module)) {
        $extensions[] = $module;
    }
}
$settings = array();
foreach ($query['settings'] as $name) {
    $value = ini_get($name);
    $settings[$name] = ($value === false) ? null : $value;
}
echo json_encode(array(
    'version' => PHP_VERSION,
    'extensions' => array_values(array_unique($extensions)),
    'settings' => (object) $settings,
    'hostname' => gethostname(),
));
"""


class PhpProbe:
    """
    Collects a RuntimeSnapshot from the PHP CLI on this host.

    Args:
        binary: PHP executable name or path.
        timeout_seconds: Kill the probe if it takes longer than this.
    """

    def __init__(self, binary: str = "php", timeout_seconds: float = 10.0) -> None:
        self.binary = binary
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_config(cls, config: ProbeConfig) -> "PhpProbe":
        return cls(binary=config.php_binary, timeout_seconds=config.timeout_seconds)

    def build_command(self, requirements: RequirementsConfig) -> list[str]:
        query = json.dumps({
            "modules": list(requirements.modules),
            "settings": list(requirements.settings),
        })
        return [self.binary, "-r", PROBE_SCRIPT, "--", query]

    def collect(self, requirements: RequirementsConfig) -> RuntimeSnapshot:
        """
        Query the runtime for everything the requirements mention.

        Raises:
            ProbeError: If PHP is missing or can't be executed, times out,
                        exits non-zero, or prints something that isn't a
                        valid snapshot.
        """
        command = self.build_command(requirements)

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_seconds,
                check=False,
            )
        except FileNotFoundError as err:
            raise ProbeError(f"PHP executable not found: {self.binary}") from err
        except OSError as err:
            raise ProbeError(f"Cannot run PHP executable {self.binary}: {err}") from err
        except subprocess.TimeoutExpired as err:
            raise ProbeError(
                f"PHP probe timed out after {self.timeout_seconds}s"
            ) from err

        if result.returncode != 0:
            raise ProbeError(
                f"PHP probe exited with code {result.returncode}: {result.stderr.strip()}"
            )

        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as err:
            raise ProbeError(f"PHP probe returned invalid JSON: {err}") from err

        try:
            snapshot = RuntimeSnapshot.model_validate(payload)
        except ValidationError as err:
            raise ProbeError(f"PHP probe returned an unexpected payload:\n{err}") from err

        _logger.debug(
            "PHP runtime probed",
            extra={
                "binary": self.binary,
                "version": snapshot.version,
                "extension_count": len(snapshot.extensions),
            },
        )
        return snapshot
