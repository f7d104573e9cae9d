"""PHP reflection registry: asks a PHP interpreter about loadable classes.

Requires a ``php`` binary (8.0+). Each lookup runs a small reflection script
which optionally requires a bootstrap file (usually ``vendor/autoload.php``)
and prints JSON on stdout:

    php -r <script> -- resolve <bootstrap> App\\Entity\\User
        -> {"exists": true, "descriptor": {...}, "attributeClasses": {...}}
    php -r <script> -- exists <bootstrap> App\\Attribute\\Column
        -> {"exists": false}
"""

from __future__ import annotations

import json
import subprocess

import structlog
from pydantic import BaseModel, Field, ValidationError

from attr_validator.exceptions import RegistryError
from attr_validator.registry.base import StructuralDescriptor, TypeRegistry, normalize_name
from attr_validator.registry.manifest import TypeSchema

log = structlog.get_logger("attr_validator.registry")

PHP_BINARY = "php"
PHP_TIMEOUT = 30  # seconds per lookup

_REFLECT_SCRIPT = r"""
[, $mode, $bootstrap, $name] = $argv;
if ($bootstrap !== '') {
    require_once $bootstrap;
}
if ($mode === 'exists' || !class_exists($name)) {
    echo json_encode(['exists' => class_exists($name)]);
    exit(0);
}
$seen = [];
$names = function (array $attributes) use (&$seen): array {
    $out = [];
    foreach ($attributes as $attribute) {
        $attributeName = $attribute->getName();
        if (!array_key_exists($attributeName, $seen)) {
            $seen[$attributeName] = class_exists($attributeName);
        }
        $out[] = $attributeName;
    }
    return $out;
};
$class = new ReflectionClass($name);
$descriptor = [
    'name' => $class->getName(),
    'attributes' => $names($class->getAttributes()),
    'properties' => [],
    'methods' => [],
    'constants' => [],
];
foreach ($class->getProperties() as $property) {
    $descriptor['properties'][] = [
        'name' => $property->getName(),
        'attributes' => $names($property->getAttributes()),
    ];
}
foreach ($class->getMethods() as $method) {
    $parameters = [];
    foreach ($method->getParameters() as $parameter) {
        $parameters[] = [
            'name' => $parameter->getName(),
            'attributes' => $names($parameter->getAttributes()),
        ];
    }
    $descriptor['methods'][] = [
        'name' => $method->getName(),
        'attributes' => $names($method->getAttributes()),
        'parameters' => $parameters,
    ];
}
foreach ($class->getReflectionConstants() as $constant) {
    $descriptor['constants'][] = [
        'name' => $constant->getName(),
        'attributes' => $names($constant->getAttributes()),
    ];
}
echo json_encode([
    'exists' => true,
    'descriptor' => $descriptor,
    'attributeClasses' => (object) $seen,
]);
"""


class ReflectionOutput(BaseModel):
    exists: bool
    descriptor: TypeSchema | None = None
    attribute_classes: dict[str, bool] = Field(default_factory=dict, alias="attributeClasses")


class PhpReflectionRegistry(TypeRegistry):
    """
    Registry backed by a PHP interpreter and the project's autoloader.

    Answers are cached per normalized name; attribute lookups made while
    reflecting a class are cached too, so validating a class usually costs a
    single interpreter run.
    """

    def __init__(
        self,
        bootstrap: str | None = None,
        php_binary: str = PHP_BINARY,
        timeout: float = PHP_TIMEOUT,
    ) -> None:
        self._bootstrap = bootstrap or ""
        self._php_binary = php_binary
        self._timeout = timeout
        self._descriptors: dict[str, StructuralDescriptor | None] = {}
        self._attribute_cache: dict[str, bool] = {}

    def resolve(self, fqcn: str) -> StructuralDescriptor | None:
        key = normalize_name(fqcn)
        if key in self._descriptors:
            return self._descriptors[key]

        output = self._run("resolve", fqcn)
        for attribute_name, exists in output.attribute_classes.items():
            self._attribute_cache[normalize_name(attribute_name)] = exists

        descriptor = None
        if output.exists:
            if output.descriptor is None:
                raise RegistryError(f"Reflection of {fqcn} returned no descriptor")
            descriptor = output.descriptor.to_descriptor(fqcn)
        self._descriptors[key] = descriptor
        return descriptor

    def annotation_definition_exists(self, name: str) -> bool:
        key = normalize_name(name)
        if key not in self._attribute_cache:
            self._attribute_cache[key] = self._run("exists", name).exists
        return self._attribute_cache[key]

    def _run(self, mode: str, name: str) -> ReflectionOutput:
        cmd = [
            self._php_binary,
            "-d",
            "display_errors=stderr",
            "-r",
            _REFLECT_SCRIPT,
            "--",
            mode,
            self._bootstrap,
            name.lstrip("\\"),
        ]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as e:
            raise RegistryError(f"PHP binary not found: {self._php_binary}") from e
        except subprocess.TimeoutExpired as e:
            raise RegistryError(f"PHP reflection of {name} timed out after {self._timeout}s") from e

        if result.returncode != 0:
            log.debug("registry.php_failed", name=name, stderr=result.stderr[-2000:])
            raise RegistryError(
                f"PHP reflection of {name} failed (exit {result.returncode}): "
                f"{result.stderr.strip()[-500:]}"
            )

        try:
            return ReflectionOutput.model_validate(json.loads(result.stdout))
        except (json.JSONDecodeError, ValidationError) as e:
            raise RegistryError(f"Unparsable PHP reflection output for {name}: {e}") from e
