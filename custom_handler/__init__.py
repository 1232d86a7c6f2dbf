"""
Service Bus 队列触发器的 Functions 自定义处理程序。
"""
