from typing import Callable, Optional, Dict, Any, get_type_hints, Type
from dataclasses import dataclass
import functools
import inspect
import numbers

from prefect import flow, task
from prefect.cache_policies import NO_CACHE


__all__ = [
    "Module",
    "InputSpec",
]

class _Missing:
    def __repr__(self):
        return "<missing>"


_MISSING = _Missing()  # _MISSING means "not provided"


@dataclass
class InputSpec:
    """Specification for a module input.

    Describes the expected type, requirement status, and default value for
    an input to a :class:`Module`. Used by :meth:`Module.set_input` to
    enforce validation and provide defaults.

    Attributes:
        type: Expected Python type for this input.
        required: Whether this input must be explicitly provided.
        default: Default value; `_MISSING` indicates no default provided.
    """
    type: Optional[Type] = None
    required: bool = False
    default: Any = _MISSING  # _MISSING means "no default"


def _matches(value, expected: Type) -> bool:
    # ints are accepted where a float is declared
    if expected is float:
        return isinstance(value, numbers.Real) and not isinstance(value, bool)
    if expected is int:
        return isinstance(value, numbers.Integral) and not isinstance(value, bool)
    return isinstance(value, expected)


class Module(object):
    """Base class for gridbayes pipeline modules.

    Provides input specification, type validation, and integration with
    Prefect tasks and flows. Each subclass registers the stages of its
    computation as run functions.

    Typical usage:
        1. Subclass :class:`Module`.
        2. Define module-wide inputs and defaults using :meth:`set_input`.
        3. Register computational functions using :meth:`run_func`.
        4. Call registered functions as Prefect tasks or flows.

    Attributes:
        inputs: Declared module-wide input specifications.
        _run_funcs: Registered computational functions.
    """

    def __init__(self):
        self.inputs: Dict[str, Dict[str, Any]] = {}
        self._run_funcs: Dict[str, Callable] = {}   # Registered run functions

        # Per-run-function input specification (built from signature)
        self._inputs_for_run: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def set_input(self, **input_defaults):
        """Defines input specifications shared by every run function.

        Each keyword argument specifies either an :class:`InputSpec`
        (for type and requirement) or a simple default value. A declared
        input overrides the signature default of every run function taking
        a parameter of that name.

        Example:
            >>> self.set_input(sample=InputSpec(type=np.ndarray, required=True), pop_spread=1.0)

        Args:
            **input_defaults: Key-value pairs of input names and their specifications.
        """
        for key, spec in input_defaults.items():
            if isinstance(spec, InputSpec):
                meta = {'type': spec.type, 'required': spec.required, 'default': spec.default}
            else:
                meta = {'type': None, 'required': False, 'default': spec}
            self.inputs[key] = meta

            for specs in self._inputs_for_run.values():
                if key in specs:
                    specs[key] = _merge_spec(specs[key], meta)

    def run_func(
            self,
            f: Callable,
            *,
            name: Optional[str] = None,
            as_task: bool = True,
            ) -> Callable:
        """Registers a computational function as a Prefect-executable task or flow.

        Registered functions become callable attributes of the module
        (e.g., ``module.combine(...)``).

        Steps performed:
            1. Infers input schema and type hints.
            2. Fills defaults and checks for missing or unknown inputs.
            3. Applies type checking.
            4. Wraps as a Prefect task or flow depending on ``as_task``.

        Args:
            f: Function implementing the computation.
            name: Custom function name override.
                Defaults to the original function name.
            as_task: Whether to register the function as a Prefect task
                (``True``) or flow (``False``). Defaults to ``True``.

        Returns:
            Callable: The decorated Prefect task or flow.

        Raises:
            RuntimeError: If a run function with the same name is already registered.
        """
        run_name = name or f.__name__
        sig = inspect.signature(f)

        if run_name in self._run_funcs:
            raise RuntimeError(f"Run function '{run_name}' already registered")

        hints = get_type_hints(f)

        # infering inputs from signature at registration time
        specs: Dict[str, Dict[str, Any]] = {}
        for pname, param in sig.parameters.items():
            if pname == "self":
                continue
            has_default = (param.default is not inspect.Parameter.empty)
            ann = hints.get(pname)
            spec = {
                'type': ann if isinstance(ann, type) else None,
                'required': not has_default,
                'default': param.default if has_default else _MISSING,
            }
            if pname in self.inputs:
                spec = _merge_spec(spec, self.inputs[pname])
            specs[pname] = spec
        self._inputs_for_run[run_name] = specs

        def _ensure_inputs_satisfied(kwargs: Dict[str, Any]) -> Dict[str, Any]:
            """Validates provided inputs and fills missing defaults.

            Raises:
                TypeError: If required inputs are missing or unexpected inputs are given.
            """
            input_specs = self._inputs_for_run[run_name]
            merged = dict(kwargs)

            unknown = [k for k in merged if k not in input_specs]
            if unknown:
                raise TypeError(f"Unknown inputs provided: {unknown}. Declared inputs are: {sorted(input_specs)}")

            # Filling defaults
            for k, meta in input_specs.items():
                if k not in merged and meta['default'] is not _MISSING:
                    merged[k] = meta['default']

            missing = [k for k in input_specs if k not in merged]
            if missing:
                raise TypeError(f"Missing required inputs for '{run_name}': {missing}")
            return merged

        def type_check(kwargs: Dict[str, Any]) -> None:
            """Validates argument types against the declared input types.

            ``None`` passes for inputs whose default is ``None``.

            Raises:
                TypeError: If an argument fails type validation.
            """
            for pname, value in kwargs.items():
                meta = self._inputs_for_run[run_name][pname]
                expected = meta['type']
                if expected is None:
                    continue
                if value is None and meta['default'] is None:
                    continue
                if not _matches(value, expected):
                    raise TypeError(
                        f"Argument '{pname}' expected {expected.__name__}; got {type(value).__name__}"
                    )

        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            """Executes the registered run function with input validation."""
            bound = sig.bind_partial(*args, **kwargs)
            provided = {k: v for k, v in bound.arguments.items() if v is not _MISSING}
            call_kwargs = _ensure_inputs_satisfied(provided)
            type_check(call_kwargs)
            return f(**call_kwargs)

        # Prefect binds call arguments against this signature and fills in
        # defaults before the wrapper runs; unset inputs arrive as _MISSING
        wrapper.__signature__ = sig.replace(parameters=[
            p.replace(default=_MISSING) for p in sig.parameters.values() if p.name != "self"
        ])

        if as_task:
            # curves are recomputed on every call, never served from cache
            pf = task(wrapper, name=run_name, cache_policy=NO_CACHE)
        else:
            pf = flow(wrapper, name=run_name, validate_parameters=False)

        # Register and assign as attribute for direct call
        self._run_funcs[run_name] = pf
        setattr(self, run_name, pf)
        return pf

    def __repr__(self):
        """Return a compact summary representation of the module."""
        return f"<{type(self).__name__} inputs={list(self.inputs.keys())} run_funcs={list(self._run_funcs.keys())}>"

    def __str__(self):
        """Return a human-readable, multi-line summary of the module configuration."""
        inputs = ", ".join(self.inputs.keys()) or "None"
        run_funcs = ", ".join(self._run_funcs.keys()) or "None"
        return f"{type(self).__name__}:\n  Inputs: {inputs}\n  Run Functions: {run_funcs}"


def _merge_spec(spec: Dict[str, Any], declared: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(spec)
    if declared['type'] is not None:
        merged['type'] = declared['type']
    if declared['default'] is not _MISSING:
        merged['default'] = declared['default']
        merged['required'] = False
    elif declared['required']:
        merged['required'] = True
        merged['default'] = _MISSING
    return merged
