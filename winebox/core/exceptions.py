"""统一异常体系

所有业务异常继承 WineboxError，替代散落的 ValueError / RuntimeError / OSError。
CLI 层据此输出友好提示并映射进程退出码。
"""

from __future__ import annotations

EXIT_FAILURE = 1
EXIT_MISSING_DEPENDENCY = 127


class WineboxError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"
    exit_code: int = EXIT_FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(WineboxError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class UsageError(WineboxError):
    """命令参数不完整或不合法"""

    code = "USAGE_ERROR"


class NoPackageSpecifiedError(UsageError):
    """未通过 -p/--package 指定包"""

    def __init__(self, message: str = "未指定包，请使用 -p/--package") -> None:
        super().__init__(message)


class NoPrefixError(UsageError):
    """未指定前缀名"""

    def __init__(self, message: str = "未指定前缀") -> None:
        super().__init__(message)


class NoCommandError(UsageError):
    """未指定要执行的命令"""

    def __init__(self, message: str = "未指定命令") -> None:
        super().__init__(message)


class MissingDependencyError(WineboxError):
    """必需的外部程序不存在"""

    code = "MISSING_DEPENDENCY"
    exit_code = EXIT_MISSING_DEPENDENCY

    def __init__(self, programs: list[str]) -> None:
        super().__init__(f"缺少必需的外部程序: {', '.join(programs)}")
        self.programs = programs


class NotFoundError(WineboxError):
    """指定的对象不存在"""

    code = "NOT_FOUND"


class PackageNotFoundError(NotFoundError):
    """远程清单中不存在该包"""


class PrefixNotFoundError(NotFoundError):
    """前缀不存在"""


class NotInstalledError(WineboxError):
    """包未安装"""

    code = "NOT_INSTALLED"


class AlreadyInstalledError(WineboxError):
    """包已安装"""

    code = "ALREADY_INSTALLED"


class AlreadyExistsError(WineboxError):
    """目标已存在"""

    code = "ALREADY_EXISTS"


class DependencyConflictError(WineboxError):
    """包仍被前缀引用，不能删除"""

    code = "DEPENDENCY_CONFLICT"

    def __init__(self, package: str, prefixes: list[str]) -> None:
        super().__init__(
            f"包 '{package}' 仍被以下前缀使用: {', '.join(prefixes)}"
        )
        self.package = package
        self.prefixes = prefixes


class CorruptRecordError(WineboxError):
    """本地记录损坏（标记文件缺失、缓存无法解析等）"""

    code = "CORRUPT_RECORD"


class ExecutionError(WineboxError):
    """下载、解压、文件系统或子进程执行失败"""

    code = "EXECUTION_ERROR"


class ValidationError(WineboxError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []
