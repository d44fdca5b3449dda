"""
Qt-facing layer: wraps the model in QObjects that emit signals on change.
"""
