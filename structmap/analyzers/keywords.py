"""Keyword tables driving directory purpose inference."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..models import FileCategory


@dataclass(frozen=True)
class DependencyFamily:
    """A group of third-party packages that tend to own a directory."""

    key: str
    label: str
    category: str
    packages: Tuple[str, ...]
    keywords: Tuple[str, ...]


DEPENDENCY_FAMILIES: Tuple[DependencyFamily, ...] = (
    DependencyFamily(
        key="i18n",
        label="国际化",
        category="config",
        packages=("i18next", "react-i18next", "next-i18next", "vue-i18n", "@lingui/core", "react-intl"),
        keywords=("i18n", "locale", "locales", "lang", "language", "translation", "translations"),
    ),
    DependencyFamily(
        key="state-management",
        label="状态管理",
        category="store",
        packages=(
            "redux",
            "@reduxjs/toolkit",
            "react-redux",
            "zustand",
            "mobx",
            "mobx-react",
            "recoil",
            "jotai",
            "pinia",
            "vuex",
        ),
        keywords=("redux", "store", "slice", "slices", "state", "zustand", "mobx", "recoil", "jotai", "atom", "atoms", "pinia", "vuex"),
    ),
    DependencyFamily(
        key="ui-kit",
        label="UI 组件库",
        category="component",
        packages=("@mui/material", "@mui/core", "material-ui", "antd", "@ant-design/icons", "@chakra-ui/react", "element-plus", "vant"),
        keywords=("mui", "material", "antd", "ant", "chakra", "element", "vant"),
    ),
    DependencyFamily(
        key="styling",
        label="样式方案",
        category="style",
        packages=("tailwindcss", "styled-components", "@emotion/react", "sass"),
        keywords=("tailwind", "styled", "emotion", "theme", "themes"),
    ),
    DependencyFamily(
        key="auth",
        label="认证",
        category="service",
        packages=("next-auth", "auth0", "@auth0/nextjs-auth0", "passport", "firebase-auth", "authlib"),
        keywords=("auth", "authentication", "next-auth", "passport"),
    ),
    DependencyFamily(
        key="routing",
        label="路由",
        category="route",
        packages=("react-router", "react-router-dom", "@tanstack/react-router", "vue-router"),
        keywords=("router", "routers", "routes", "route"),
    ),
    DependencyFamily(
        key="forms",
        label="表单",
        category="component",
        packages=("react-hook-form", "@hookform/resolvers", "formik", "final-form", "wtforms"),
        keywords=("react-hook-form", "hookform", "hook-form", "formik", "final-form"),
    ),
    DependencyFamily(
        key="data-fetching",
        label="数据请求",
        category="service",
        packages=("react-query", "@tanstack/react-query", "swr", "axios", "httpx", "requests"),
        keywords=("query", "queries", "react-query", "swr", "axios", "http", "request", "requests"),
    ),
    DependencyFamily(
        key="graphql",
        label="GraphQL 客户端",
        category="service",
        packages=("apollo-client", "@apollo/client", "urql", "graphql", "graphene"),
        keywords=("apollo", "graphql", "gql", "urql"),
    ),
    DependencyFamily(
        key="date",
        label="日期处理",
        category="utility",
        packages=("date-fns", "dayjs", "moment", "luxon", "arrow", "pendulum"),
        keywords=("date", "dates", "time", "calendar", "datetime"),
    ),
    DependencyFamily(
        key="utility",
        label="工具库",
        category="utility",
        packages=("lodash", "lodash-es", "ramda", "underscore", "toolz"),
        keywords=("lodash", "ramda", "underscore"),
    ),
    DependencyFamily(
        key="testing",
        label="测试",
        category="test",
        packages=("jest", "@testing-library/react", "vitest", "mocha", "cypress", "playwright", "pytest"),
        keywords=("test", "tests", "__tests__", "__test__", "spec", "specs", "e2e", "cypress", "playwright"),
    ),
    DependencyFamily(
        key="lint-format",
        label="代码规范",
        category="config",
        packages=("eslint", "@typescript-eslint/eslint-plugin", "prettier", "stylelint", "ruff", "black", "flake8"),
        keywords=("eslint", "lint", "linting", "prettier", "stylelint"),
    ),
)


@dataclass(frozen=True)
class StructuralLabel:
    purpose: str
    category: str


_COMPONENT = StructuralLabel("组件", "component")
_PAGE = StructuralLabel("页面", "page")
_UTILITY = StructuralLabel("工具函数", "utility")
_SCRIPT = StructuralLabel("脚本", "utility")
_API = StructuralLabel("API", "service")
_SERVICE = StructuralLabel("API 服务", "service")
_I18N = StructuralLabel("国际化", "config")
_HOOK = StructuralLabel("Hooks", "hook")
_STYLE = StructuralLabel("样式", "style")
_STORE = StructuralLabel("状态管理", "store")
_TYPE = StructuralLabel("类型定义", "type")
_MODEL = StructuralLabel("数据模型", "model")
_CONTROLLER = StructuralLabel("控制器", "controller")
_REPOSITORY = StructuralLabel("数据仓库", "repository")
_ROUTE = StructuralLabel("路由", "route")
_MIDDLEWARE = StructuralLabel("中间件", "middleware")
_LAYOUT = StructuralLabel("布局", "layout")
_FEATURE = StructuralLabel("功能模块", "feature")
_SHARED = StructuralLabel("共享", "shared")
_COMMON = StructuralLabel("公共文件", "shared")
_CONFIG = StructuralLabel("配置", "config")
_TEST = StructuralLabel("测试", "test")
_CONSTANT = StructuralLabel("常量", "constant")
_LIBRARY = StructuralLabel("库", "utility")
_PUBLIC = StructuralLabel("公共资源", "asset")
_ASSET = StructuralLabel("资源文件", "asset")
_STATIC = StructuralLabel("静态资源", "asset")
_MOCK = StructuralLabel("Mock 数据", "test")
_PROTO = StructuralLabel("协议定义", "type")

STRUCTURAL_KEYWORDS: Dict[str, StructuralLabel] = {
    "components": _COMPONENT,
    "component": _COMPONENT,
    "pages": _PAGE,
    "page": _PAGE,
    "views": _PAGE,
    "view": _PAGE,
    "screens": _PAGE,
    "utils": _UTILITY,
    "util": _UTILITY,
    "utilities": _UTILITY,
    "helpers": _UTILITY,
    "helper": _UTILITY,
    "scripts": _SCRIPT,
    "script": _SCRIPT,
    "api": _API,
    "apis": _API,
    "services": _SERVICE,
    "service": _SERVICE,
    "i18n": _I18N,
    "locale": _I18N,
    "locales": _I18N,
    "hooks": _HOOK,
    "hook": _HOOK,
    "styles": _STYLE,
    "style": _STYLE,
    "css": _STYLE,
    "scss": _STYLE,
    "store": _STORE,
    "stores": _STORE,
    "state": _STORE,
    "types": _TYPE,
    "type": _TYPE,
    "interfaces": _TYPE,
    "typings": _TYPE,
    "models": _MODEL,
    "model": _MODEL,
    "entities": _MODEL,
    "entity": _MODEL,
    "schemas": _MODEL,
    "controllers": _CONTROLLER,
    "controller": _CONTROLLER,
    "repositories": _REPOSITORY,
    "repository": _REPOSITORY,
    "routes": _ROUTE,
    "route": _ROUTE,
    "routers": _ROUTE,
    "router": _ROUTE,
    "middleware": _MIDDLEWARE,
    "middlewares": _MIDDLEWARE,
    "layouts": _LAYOUT,
    "layout": _LAYOUT,
    "features": _FEATURE,
    "feature": _FEATURE,
    "modules": _FEATURE,
    "module": _FEATURE,
    "shared": _SHARED,
    "common": _COMMON,
    "commons": _COMMON,
    "config": _CONFIG,
    "configs": _CONFIG,
    "tests": _TEST,
    "test": _TEST,
    "__tests__": _TEST,
    "spec": _TEST,
    "specs": _TEST,
    "constants": _CONSTANT,
    "consts": _CONSTANT,
    "lib": _LIBRARY,
    "libs": _LIBRARY,
    "public": _PUBLIC,
    "assets": _ASSET,
    "static": _STATIC,
    "mocks": _MOCK,
    "mock": _MOCK,
    "__mocks__": _MOCK,
    "proto": _PROTO,
    "protos": _PROTO,
}

# Plurals are tolerated by the matcher, so only singular forms are listed.
BUSINESS_KEYWORDS: Dict[str, str] = {
    "user": "用户",
    "account": "账户",
    "login": "登录",
    "register": "注册",
    "profile": "个人资料",
    "payment": "支付",
    "pay": "支付",
    "wallet": "钱包",
    "balance": "余额",
    "transaction": "交易",
    "order": "订单",
    "cart": "购物车",
    "checkout": "结算",
    "product": "产品",
    "inventory": "库存",
    "insurance": "保险",
    "claim": "理赔",
    "policy": "保单",
    "premium": "保费",
    "loan": "贷款",
    "credit": "信用",
    "repayment": "还款",
    "installment": "分期",
    "report": "报表",
    "dashboard": "仪表盘",
    "analytics": "分析",
    "statistic": "统计",
    "notification": "通知",
    "message": "消息",
    "email": "邮件",
    "sms": "短信",
    "document": "文档",
    "upload": "上传",
    "download": "下载",
    "kyc": "实名认证",
}

CATEGORY_PURPOSES: Dict[FileCategory, Optional[str]] = {
    FileCategory.PAGE: "页面",
    FileCategory.COMPONENT: "组件",
    FileCategory.HOOK: "Hooks",
    FileCategory.UTILITY: "工具函数",
    FileCategory.SERVICE: "API 服务",
    FileCategory.TYPE: "类型定义",
    FileCategory.ENUM: "枚举",
    FileCategory.CONSTANT: "常量",
    FileCategory.CONFIG: "配置",
    FileCategory.TEST: "测试",
    FileCategory.STYLE: "样式",
    FileCategory.LAYOUT: "布局",
    FileCategory.MIDDLEWARE: "中间件",
    FileCategory.MODEL: "数据模型",
    FileCategory.REPOSITORY: "数据仓库",
    FileCategory.CONTROLLER: "控制器",
    FileCategory.ROUTE: "路由",
    FileCategory.OTHER: None,
}

FALLBACK_PURPOSE = "其他"
FALLBACK_CATEGORY = "other"

# Source roots are kept in the tree but carry no functional label of their own.
CONTAINER_DIRECTORIES = frozenset({"src", "source", "sources", "app", "apps"})
CONTAINER_CATEGORY = "container"

PROJECT_SUFFIX = "项目"
PROJECT_CATEGORY = "project"
PROJECT_COUNTRY_CODES = ("id", "my", "ph", "sg", "th", "tw", "vn", "hk", "jp", "cn")


def lookup_business(token: str) -> Optional[str]:
    """Translate a name token into a business qualifier, tolerating plurals."""
    if token in BUSINESS_KEYWORDS:
        return BUSINESS_KEYWORDS[token]
    if token.endswith("ies") and f"{token[:-3]}y" in BUSINESS_KEYWORDS:
        return BUSINESS_KEYWORDS[f"{token[:-3]}y"]
    for suffix in ("es", "s"):
        if token.endswith(suffix) and token[: -len(suffix)] in BUSINESS_KEYWORDS:
            return BUSINESS_KEYWORDS[token[: -len(suffix)]]
    return None
