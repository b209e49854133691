"""服务层：运行时与服务容器"""
