# -*- coding: utf-8 -*-
"""
部署契约：目标配置、回调参数与回调集合。

编排器按 target.type 选择插件，然后调用统一的两个入口：
    plugin.deploy_file(file, target, options)
    plugin.deploy_workspace(files, target, options)
结果只通过 options 里的回调返回，入口本身不返回值也不抛异常。
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, Sequence, runtime_checkable

from app_deploy.helpers import normalize_string_list, to_string_safe

FILE_PLACEHOLDER = "${file}"
DEFAULT_SEPARATOR = " "


@dataclass
class DeployTarget:
    name: str = ""
    description: str = ""
    type: str = ""


@dataclass
class DeployTargetApp(DeployTarget):
    """
    用外部应用打开文件的部署目标。

    - app: 应用路径；相对路径按工作区根目录解析；为空则交给系统默认程序。
    - arguments: 参数模板列表，可包含字面量 ${file}。
    - separator: 工作区模式下把附加文件拼成一个值时使用的分隔符，默认空格。
    """

    app: str | None = None
    arguments: list[str] | None = None
    separator: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeployTargetApp":
        app = data.get("app")
        separator = data.get("separator")
        return cls(
            name=to_string_safe(data.get("name")),
            description=to_string_safe(data.get("description")),
            type=to_string_safe(data.get("type")) or "app",
            app=None if app is None else to_string_safe(app),
            arguments=normalize_string_list(data.get("arguments")),
            separator=None if separator is None else to_string_safe(separator),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "type": self.type or "app"}
        if self.description:
            out["description"] = self.description
        if self.app is not None:
            out["app"] = self.app
        if self.arguments is not None:
            out["arguments"] = list(self.arguments)
        if self.separator is not None:
            out["separator"] = self.separator
        return out


@dataclass(frozen=True)
class DeployFileEventArguments:
    file: str
    target: DeployTarget


@dataclass(frozen=True)
class DeployFileCompletedEventArguments:
    file: str
    target: DeployTarget
    error: BaseException | None = None


@dataclass(frozen=True)
class DeployWorkspaceCompletedEventArguments:
    error: BaseException | None = None


BeforeDeployFileCallback = Callable[[Any, DeployFileEventArguments], None]
FileCompletedCallback = Callable[[Any, DeployFileCompletedEventArguments], None]
WorkspaceCompletedCallback = Callable[[Any, DeployWorkspaceCompletedEventArguments], None]


@dataclass
class DeployFileOptions:
    on_before_deploy: BeforeDeployFileCallback | None = None
    on_completed: FileCompletedCallback | None = None


@dataclass
class DeployWorkspaceOptions:
    on_before_deploy_file: BeforeDeployFileCallback | None = None
    on_file_completed: FileCompletedCallback | None = None
    on_completed: WorkspaceCompletedCallback | None = None


@runtime_checkable
class DeployPlugin(Protocol):
    def deploy_file(
        self,
        file: str,
        target: DeployTarget,
        options: DeployFileOptions | None = None,
    ) -> None:
        ...

    def deploy_workspace(
        self,
        files: Sequence[str],
        target: DeployTarget,
        options: DeployWorkspaceOptions | None = None,
    ) -> None:
        ...
