from .classes import phase, rr_status, flash_method, class_dic, alias_dic, worst_status, RRDomainError, ConvergenceWarning, RRResult, FlashResult
