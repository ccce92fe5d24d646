"""
Base generator interface for all binding targets.

Defines the contract that all language generators must implement, the
error hierarchy and the result container returned by generate_code().
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig
from .schema import Package, StreamType, FlagsType
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class SchemaIntegrityError(GeneratorError):
    """The package graph broke an invariant the upstream parser guarantees."""

    pass


class DanglingTypeReferenceError(SchemaIntegrityError):
    """A type id is absent from the package's type table."""

    def __init__(self, index: int):
        super().__init__(f"Type id {index} is not defined in the package")
        self.index = index


class UnknownTypeKindError(SchemaIntegrityError, NotImplementedError):
    """The generator has no rendering for a type definition kind."""

    def __init__(self, tag: str, type_name: Optional[str] = None):
        where = f" (type '{type_name}')" if type_name else ""
        super().__init__(f"Unsupported type definition kind: {tag}{where}")
        self.tag = tag


class AliasDepthError(SchemaIntegrityError):
    """An alias chain did not terminate within the hop limit."""

    def __init__(self, index: int, limit: int):
        super().__init__(
            f"Alias chain starting at type id {index} exceeds {limit} hops"
        )
        self.index = index
        self.limit = limit


class CodeGenerator(ABC):
    """Abstract base class for all binding generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'dart')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.dart')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, package: Package) -> str:
        """
        Generate bindings for a whole package.

        Args:
            package: Fully resolved package graph

        Returns:
            Generated source text
        """
        pass

    def collect_warnings(self, package: Package) -> List[str]:
        """
        Report constructs whose rendering is known to be incomplete.

        Args:
            package: Package about to be generated

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for index, type_def in package.types.items():
            label = type_def.name or f"#{index}"
            if isinstance(type_def.kind, FlagsType) and type_def.kind.flags:
                warnings.append(
                    f"Flags '{label}' are emitted as sequential indices, "
                    f"not bit positions"
                )
            elif isinstance(type_def.kind, StreamType) and type_def.kind.end is not None:
                warnings.append(
                    f"Stream '{label}' end-of-stream payload is not represented"
                )

        for interface in package.interfaces.values():
            if not interface.functions:
                warnings.append(f"Interface '{interface.name}' has no functions")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        text = "\n".join(formatted_lines).strip("\n") + "\n"
        if self.config.line_ending != "\n":
            text = text.replace("\n", self.config.line_ending)
        return text

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result. Failed runs carry no code."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, package: Package) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Any failure aborts the run; the partially built output is dropped.

    Args:
        generator: Code generator instance
        package: Package graph to generate bindings for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.collect_warnings(package)
        for warning in warnings:
            logger.warning(warning)

        code = generator.generate(package)
        formatted_code = generator.format_code(code)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "package": package.name,
            "type_count": len(package.types),
            "interface_count": len(package.interfaces),
            "world_count": len(package.worlds),
        }

        return GenerationResult(formatted_code, warnings, metadata)

    except Exception as e:
        logger.error("Generation of package '%s' aborted: %s", package.name, e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
