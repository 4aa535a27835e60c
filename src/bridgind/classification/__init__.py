from bridgind.classification.classifier import classify, normalize_amount

__all__ = ["classify", "normalize_amount"]
