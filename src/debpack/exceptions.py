class BuildError(Exception):
    pass


class ConfigurationError(BuildError):
    pass


class ArchitectureDetectionError(BuildError):
    pass


class FilesystemError(BuildError):
    pass


class ExternalToolError(BuildError):
    pass


class ToolNotFoundError(ExternalToolError):
    pass


class VerificationError(Exception):
    pass


class InvalidPackageError(VerificationError):
    pass
