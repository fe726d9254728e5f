from conslisp.reader.tokenizer import Token, iter_tokens, tokenize
from conslisp.reader.parser import Cursor, parse, parse_object, read, check_balance
