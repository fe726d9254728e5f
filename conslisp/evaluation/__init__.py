from conslisp.evaluation.evaluator import evaluate, apply_procedure, evaluate_sequence
