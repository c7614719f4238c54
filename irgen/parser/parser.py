# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
lark front-end for the Go declaration subset.

`parse_source(text)` turns one Go file into a `SourceFile`. Statement
terminators are produced by `TerminatorInserter` following Go's automatic
semicolon insertion, so the grammar itself never sees newlines or comments.
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import List, Optional, Tuple

from lark import Lark, Token, Tree

from .ast import (
	ArrayType,
	ChanType,
	EmbeddedElem,
	FuncType,
	ImportSpec,
	InterfaceType,
	Located,
	MapType,
	MethodSig,
	OpaqueType,
	ParamGroup,
	PointerType,
	SliceType,
	SourceFile,
	StructType,
	TypeDecl,
	TypeExpr,
	TypeName,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


class ParseError(ValueError):
	"""Input accepted by the grammar but rejected by the tree builders."""

	def __init__(self, message: str, loc: Optional[Located] = None) -> None:
		super().__init__(message)
		self.loc = loc


class TerminatorInserter:
	"""
	Post-lexer implementing Go's semicolon insertion.

	A newline (or a block comment spanning lines, or the end of input) ends a
	statement when the last real token on the line is an identifier, a
	literal, `++`/`--`, or a closing bracket. Explicit `;` always terminates.
	Comments are dropped.
	"""

	always_accept = ("NEWLINE", "SEMI", "COMMENT")

	TERMINABLE = {
		"NAME",
		"NUMBER",
		"STRING",
		"RAW_STRING",
		"RUNE",
		"_RPAR",
		"_RSQB",
		"_RBRACE",
	}

	INC_DEC = {"++", "--"}

	def __init__(self) -> None:
		self._reset()

	def _reset(self) -> None:
		self.can_terminate = False
		self.last = None

	def process(self, stream):
		self._reset()
		for token in stream:
			ttype = token.type
			if ttype == "COMMENT":
				if "\n" in token.value and self.can_terminate:
					yield Token.new_borrow_pos("_TERMINATOR", "\n", token)
					self.can_terminate = False
				continue
			if ttype == "NEWLINE":
				if self.can_terminate:
					yield Token.new_borrow_pos("_TERMINATOR", token.value, token)
					self.can_terminate = False
				continue
			if ttype == "SEMI":
				yield Token.new_borrow_pos("_TERMINATOR", token.value, token)
				self.can_terminate = False
				continue
			yield token
			self.last = token
			self.can_terminate = self._is_terminable(token)
		if self.can_terminate and self.last is not None:
			yield Token.new_borrow_pos("_TERMINATOR", "", self.last)
			self.can_terminate = False

	def _is_terminable(self, token: Token) -> bool:
		if token.type == "OP":
			return token.value in self.INC_DEC
		return token.type in self.TERMINABLE


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=TerminatorInserter(),
)


def parse_source(source: str, path: str = "<input>") -> SourceFile:
	"""Parse one Go source file. Raises lark `UnexpectedInput` or ParseError."""
	if source.startswith("\ufeff"):
		source = source[1:]
	tree = _PARSER.parse(source)
	return _Builder(source, path).build_file(tree)


def _name(tree: Tree) -> str:
	return tree.data if isinstance(tree.data, str) else tree.data.value


def _loc(tree: Tree) -> Optional[Located]:
	meta = tree.meta
	if getattr(meta, "empty", True):
		return None
	return Located(line=meta.line, column=meta.column)


def _loc_from_token(tok: Token) -> Located:
	return Located(line=tok.line or 0, column=tok.column or 0)


def _subtrees(tree: Tree) -> List[Tree]:
	return [child for child in tree.children if isinstance(child, Tree)]


class _Builder:
	"""Turns the lark tree of one file into the declaration AST."""

	def __init__(self, source: str, path: str) -> None:
		self.source = source
		self.path = path

	def _text(self, tree: Tree) -> str:
		"""
		Source text covered by `tree`, on one line.

		The slice is re-lexed so comments disappear and every inserted
		terminator becomes an explicit `;` (none before a closing brace).
		Any other run of whitespace between two tokens is kept as one space,
		so literals such as struct tags come out untouched.
		"""
		meta = tree.meta
		if getattr(meta, "empty", True):
			return ""
		parts: List[str] = []
		prev_end: Optional[int] = None
		terminated = False
		for tok in _PARSER.lex(self.source[meta.start_pos : meta.end_pos]):
			if tok.type == "_TERMINATOR":
				terminated = True
				continue
			if terminated and tok.type != "_RBRACE":
				parts.append(";")
			if prev_end is not None and (terminated or tok.start_pos > prev_end):
				parts.append(" ")
			parts.append(tok.value)
			prev_end = tok.end_pos
			terminated = False
		return "".join(parts)

	def build_file(self, tree: Tree) -> SourceFile:
		package = ""
		imports: List[ImportSpec] = []
		types: List[TypeDecl] = []
		for child in _subtrees(tree):
			kind = _name(child)
			if kind == "package_clause":
				package = child.children[0].value
			elif kind == "import_decl":
				imports.extend(self._build_import_spec(spec) for spec in _subtrees(child))
			elif kind == "type_decl":
				types.extend(self._build_type_spec(spec) for spec in _subtrees(child))
			# other_decl: functions, vars and consts carry nothing we need.
		return SourceFile(path=self.path, package=package, imports=tuple(imports), types=tuple(types))

	def _build_import_spec(self, tree: Tree) -> ImportSpec:
		path_node = next(c for c in _subtrees(tree) if _name(c) == "import_path")
		path_tok = path_node.children[0]
		if path_tok.type == "RAW_STRING":
			path = path_tok.value[1:-1]
		else:
			path = ast.literal_eval(path_tok.value)
		name: Optional[str] = None
		if _name(tree) == "dot_import_spec":
			name = "."
		else:
			name_tok = next((c for c in tree.children if isinstance(c, Token) and c.type == "NAME"), None)
			if name_tok is not None:
				name = name_tok.value
		return ImportSpec(path=path, name=name, loc=_loc(tree))

	def _build_type_spec(self, tree: Tree) -> TypeDecl:
		name_tok = tree.children[0]
		body = tree.children[-1]
		if _name(body) == "interface_type":
			type_expr: TypeExpr = self._build_interface(body)
		else:
			type_expr = OpaqueType()
		return TypeDecl(
			name=name_tok.value,
			type_expr=type_expr,
			loc=_loc_from_token(name_tok),
			file=self.path,
		)

	def _build_interface(self, tree: Tree) -> InterfaceType:
		elements = []
		for child in _subtrees(tree):
			kind = _name(child)
			if kind == "method_spec":
				elements.append(self._build_method(child))
			elif kind == "embedded_elem":
				elements.append(EmbeddedElem(source=self._text(child), loc=_loc(child)))
		return InterfaceType(elements=tuple(elements))

	def _build_method(self, tree: Tree) -> MethodSig:
		name_tok = tree.children[0]
		params_node = tree.children[1]
		results: Tuple[ParamGroup, ...] = ()
		if len(tree.children) > 2:
			results = self._build_result(tree.children[2])
		return MethodSig(
			name=name_tok.value,
			params=self._build_params(params_node),
			results=results,
			loc=_loc_from_token(name_tok),
		)

	def _build_result(self, tree: Tree) -> Tuple[ParamGroup, ...]:
		inner = tree.children[0]
		if _name(inner) == "parameters":
			return self._build_params(inner)
		return (ParamGroup(names=(), type_expr=self._build_type(inner)),)

	def _build_params(self, tree: Tree) -> Tuple[ParamGroup, ...]:
		"""
		Group a parameter list the way Go does.

		If any item has both a name and a type, the list is a named one: bare
		identifiers are names that share the type of the next typed item.
		Otherwise every item is an unnamed parameter type.
		"""
		items: List[Tuple[Optional[str], TypeExpr, bool, Optional[Located]]] = []
		for decl in _subtrees(tree):
			children = decl.children
			name: Optional[str] = None
			if isinstance(children[0], Token):
				name = children[0].value
				children = children[1:]
			type_node = children[0]
			variadic = _name(type_node) == "variadic"
			if variadic:
				type_node = type_node.children[0]
			items.append((name, self._build_type(type_node), variadic, _loc(decl)))

		if not any(name is not None for name, _t, _v, _l in items):
			return tuple(ParamGroup(names=(), type_expr=t, variadic=v) for _n, t, v, _l in items)

		groups: List[ParamGroup] = []
		pending: List[str] = []
		for name, type_expr, variadic, loc in items:
			if name is None:
				if variadic or not isinstance(type_expr, TypeName) or not type_expr.is_bare:
					raise ParseError("mixed named and unnamed parameters", loc)
				pending.append(type_expr.name)
				continue
			pending.append(name)
			groups.append(ParamGroup(names=tuple(pending), type_expr=type_expr, variadic=variadic))
			pending = []
		if pending:
			raise ParseError("mixed named and unnamed parameters", _loc(tree))
		return tuple(groups)

	def _build_type(self, tree: Tree) -> TypeExpr:
		kind = _name(tree)
		if kind == "type_name":
			name_tok = tree.children[0]
			return TypeName(name=name_tok.value, args=self._build_type_args(tree))
		if kind == "qualified_type_name":
			pkg_tok, name_tok = tree.children[0], tree.children[1]
			return TypeName(name=name_tok.value, package=pkg_tok.value, args=self._build_type_args(tree))
		if kind == "pointer_type":
			return PointerType(elem=self._build_type(tree.children[0]))
		if kind == "slice_type":
			return SliceType(elem=self._build_type(tree.children[0]))
		if kind == "array_type":
			index, elem = tree.children
			return ArrayType(length=self._build_array_length(index), elem=self._build_type(elem))
		if kind == "map_type":
			key, value = tree.children
			return MapType(key=self._build_type(key), value=self._build_type(value))
		if kind == "chan_type":
			return ChanType(elem=self._build_type(tree.children[0]))
		if kind == "send_chan_type":
			return ChanType(elem=self._build_type(tree.children[0]), direction="send")
		if kind == "recv_chan_type":
			return ChanType(elem=self._build_type(tree.children[0]), direction="recv")
		if kind == "func_type":
			results: Tuple[ParamGroup, ...] = ()
			if len(tree.children) > 1:
				results = self._build_result(tree.children[1])
			return FuncType(params=self._build_params(tree.children[0]), results=results)
		if kind == "struct_type":
			return StructType(source=self._text(tree))
		if kind == "interface_type":
			return self._build_interface(tree)
		raise ParseError(f"unsupported type expression '{kind}'", _loc(tree))

	def _build_type_args(self, tree: Tree) -> Tuple[TypeExpr, ...]:
		index = next((c for c in _subtrees(tree) if _name(c) == "index"), None)
		if index is None:
			return ()
		args = []
		for item in index.children:
			if isinstance(item, Token):
				raise ParseError(f"'{item.value}' is not a type argument", _loc_from_token(item))
			args.append(self._build_type(item))
		return tuple(args)

	def _build_array_length(self, index: Tree) -> str:
		if len(index.children) != 1:
			raise ParseError("array length must be a single expression", _loc(index))
		item = index.children[0]
		if isinstance(item, Token):
			return item.value
		length = self._build_type(item)
		if not isinstance(length, TypeName) or length.args:
			raise ParseError("unsupported array length", _loc(index))
		if length.package is not None:
			return f"{length.package}.{length.name}"
		return length.name


__all__ = ["ParseError", "TerminatorInserter", "parse_source"]
