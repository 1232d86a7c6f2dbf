"""
触发层（Triggers）

每种触发器负责把 Host 发来的调用信封归一化为业务输入，
完成处理后再组装成 InvocationResponse 交还给 Host。
"""
