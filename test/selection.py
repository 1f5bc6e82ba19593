"""
Selector engine tests (grammar, matching, subset construction).

Scope
- Validate the selector grammar and its syntax errors (message and offset).
- Validate key/wildcard/set/recursive matching order and completeness.
- Validate subset/slice depth limiting and metadata preservation.

Conventions
- Test method names follow CamelCase per project convention.
- The module is not named after argtree.selectors to keep the standard
  library's selectors module importable.
"""

import unittest
from unittest import TestCase

from argtree import Command, Group, command, group
from argtree.faults import CommandException, FaultCode, SelectorSyntaxError
from argtree.selectors import Match, Step, match, parse, slice, subset


def sample():
    return group({
        "user": group({
            "list": command("list users"),
            "create": command("create a user"),
        }, "User"),
        "deploy": group({
            "aws": group({
                "lambda": command("deploy a function"),
                "s3": command("sync a bucket"),
            }, "AWS", hidden=True),
            "vercel": command("deploy to vercel"),
        }, "Deploy"),
        "plain": group({
            "alpha": command(),
            "beta": command(),
        }),
        "config": group({
            "create": command("create a config"),
        }),
    })


def paths(matches):
    return [found.path for found in matches]


class TestParse(TestCase):

    def testRoot(self):
        self.assertEqual(parse("."), [])

    def testKeys(self):
        self.assertEqual(parse(".user.list"), [Step("key", ("user",)), Step("key", ("list",))])

    def testSet(self):
        self.assertEqual(parse(".user.{create,delete}"), [Step("key", ("user",)), Step("set", ("create", "delete"))])

    def testSetIgnoresSpaces(self):
        self.assertEqual(parse(".{ a , b }"), [Step("set", ("a", "b"))])

    def testWildcard(self):
        self.assertEqual(parse(".deploy.*"), [Step("key", ("deploy",)), Step("wildcard", ())])

    def testRecursiveAlone(self):
        self.assertEqual(parse(".."), [Step("recursive", ())])

    def testRecursiveFollowedBySegment(self):
        self.assertEqual(parse("..create"), [Step("recursive", ()), Step("key", ("create",))])

    def testTrailingRecursive(self):
        self.assertEqual(parse(".deploy.."), [Step("key", ("deploy",)), Step("recursive", ())])

    def testRecursiveThenDot(self):
        self.assertEqual(parse("...user"), [Step("recursive", ()), Step("key", ("user",))])

    def testIdentifierCharacters(self):
        self.assertEqual(parse(".a-b_c9"), [Step("key", ("a-b_c9",))])

    def assertSyntaxError(self, text, message, offset):
        with self.assertRaises(SelectorSyntaxError) as context:
            parse(text)
        self.assertEqual(context.exception.message, message)
        self.assertEqual(context.exception.offset, offset)
        self.assertEqual(context.exception.code, FaultCode.SELECTOR_SYNTAX)

    def testEmpty(self):
        self.assertSyntaxError("", "selector is empty", 0)

    def testMissingLeadingDot(self):
        self.assertSyntaxError("user", 'selector must start with "."', 0)

    def testTrailingDot(self):
        self.assertSyntaxError(".user.", "expected identifier at 6", 6)

    def testEmptySet(self):
        self.assertSyntaxError(".{}", "selector set cannot be empty", 2)
        self.assertSyntaxError(".{ }", "selector set cannot be empty", 3)

    def testUnterminatedSet(self):
        self.assertSyntaxError(".{a b}", 'expected "," or "}" at 4', 4)

    def testSetEndingAfterMember(self):
        self.assertSyntaxError(".{a", 'expected "," or "}" at 3', 3)

    def testSetEndingAfterComma(self):
        self.assertSyntaxError(".{a,", "expected identifier at 4", 4)
        self.assertSyntaxError(".{a, ", "expected identifier at 5", 5)
        self.assertSyntaxError(".user.{create,", "expected identifier at 14", 14)

    def testSetEndingAfterBrace(self):
        self.assertSyntaxError(".{", "selector set cannot be empty", 2)

    def testBadSetMember(self):
        self.assertSyntaxError(".{a,}", "expected identifier at 4", 4)

    def testUnexpectedIdentifierCharacter(self):
        self.assertSyntaxError(".@", "expected identifier at 1", 1)

    def testUnexpectedCharacterAfterSegment(self):
        self.assertSyntaxError(".user list", "unexpected character ' ' at 5", 5)

    def testErrorIsCommandException(self):
        with self.assertRaises(CommandException):
            parse("nope")


class TestMatch(TestCase):

    def setUp(self):
        self.tree = sample()

    def testNoStepsMatchesRoot(self):
        self.assertEqual(match(self.tree, []), [Match([], self.tree)])

    def testKey(self):
        found = match(self.tree, parse(".user"))
        self.assertEqual(paths(found), [["user"]])
        self.assertIs(found[0].node, self.tree["user"])

    def testMissingKey(self):
        self.assertEqual(match(self.tree, parse(".nope.list")), [])

    def testKeyPastCommand(self):
        self.assertEqual(match(self.tree, parse(".user.list.more")), [])

    def testWildcard(self):
        self.assertEqual(paths(match(self.tree, parse(".deploy.*"))), [["deploy", "aws"], ["deploy", "vercel"]])

    def testWildcardPastCommand(self):
        self.assertEqual(match(self.tree, parse(".deploy.vercel.*")), [])

    def testSetKeepsDeclarationOrder(self):
        found = match(self.tree, parse(".user.{create,list,missing}"))
        self.assertEqual(paths(found), [["user", "create"], ["user", "list"]])

    def testRecursiveFromPoint(self):
        found = match(self.tree, parse(".deploy.."))
        self.assertEqual(paths(found), [
            ["deploy"],
            ["deploy", "aws"],
            ["deploy", "aws", "lambda"],
            ["deploy", "aws", "s3"],
            ["deploy", "vercel"],
        ])

    def testRecursiveSearch(self):
        self.assertEqual(paths(match(self.tree, parse("..create"))), [["user", "create"], ["config", "create"]])

    def testRecursiveEnumeratesEverything(self):
        found = match(self.tree, parse(".."))
        self.assertEqual(found[0], Match([], self.tree))
        self.assertEqual(len(found), 14)
        self.assertEqual(len({tuple(path) for path in paths(found)}), len(found))
        self.assertEqual(paths(found)[:4], [[], ["user"], ["user", "list"], ["user", "create"]])

    def testStable(self):
        steps = parse("..{create,list}")
        self.assertEqual(match(self.tree, steps), match(self.tree, steps))


class TestSubset(TestCase):

    def setUp(self):
        self.tree = sample()

    def testScopesToGroupWithOneLevel(self):
        result = subset(self.tree, match(self.tree, parse(".deploy")), 1)
        self.assertEqual(list(result.children), ["deploy"])
        deploy = result["deploy"]
        self.assertIsInstance(deploy, Group)
        self.assertEqual(list(deploy.children), ["aws", "vercel"])
        self.assertIsInstance(deploy["aws"], Group)
        self.assertEqual(deploy["aws"].children, {})
        self.assertEqual(deploy["aws"].meta, {"descr": "AWS", "hidden": True})
        self.assertIsInstance(deploy["vercel"], Command)

    def testScopesToNestedGroup(self):
        result = subset(self.tree, match(self.tree, parse(".deploy.aws")), 1)
        deploy = result["deploy"]
        self.assertEqual(list(deploy.children), ["aws"])
        self.assertEqual(deploy.meta, {"descr": "Deploy"})
        self.assertEqual(list(deploy["aws"].children), ["lambda", "s3"])

    def testSetSelection(self):
        result = subset(self.tree, match(self.tree, parse(".{user,plain}")), 1)
        self.assertEqual(list(result.children), ["user", "plain"])

    def testMetaLessWaypointStaysMetaLess(self):
        result = subset(self.tree, match(self.tree, parse(".plain.alpha")), 0)
        self.assertEqual(result["plain"].meta, {})
        self.assertEqual(list(result["plain"].children), ["alpha"])

    def testDepthZeroKeepsOnlyMetadata(self):
        result = subset(self.tree, match(self.tree, parse(".user")), 0)
        self.assertEqual(result["user"].children, {})
        self.assertEqual(result["user"].descr, "User")

    def testCommandsAreSharedNotCopied(self):
        result = subset(self.tree, match(self.tree, parse(".user.list")), 1)
        self.assertIs(result["user"]["list"], self.tree["user"]["list"])

    def testDeeperMatchesExtendEarlierOnes(self):
        result = subset(self.tree, match(self.tree, parse(".deploy..")), 1)
        self.assertEqual(list(result["deploy"]["aws"].children), ["lambda", "s3"])

    def testRootMatchSlicesWholeTree(self):
        result = subset(self.tree, match(self.tree, parse(".")), 1)
        self.assertEqual(list(result.children), ["user", "deploy", "plain", "config"])
        self.assertEqual(result["deploy"].children, {})
        self.assertEqual(result["deploy"].descr, "Deploy")

    def testNoMatchesGiveEmptyTree(self):
        result = subset(self.tree, [], 1)
        self.assertEqual(result.children, {})
        self.assertEqual(result.meta, {})

    def testOriginalIsUntouched(self):
        subset(self.tree, match(self.tree, parse(".deploy.aws")), 0)
        self.assertEqual(list(self.tree["deploy"].children), ["aws", "vercel"])
        self.assertEqual(list(self.tree["deploy"]["aws"].children), ["lambda", "s3"])


class TestSlice(TestCase):

    def testCommandIsReturnedAsIs(self):
        c = command()
        self.assertIs(slice(c, 0), c)

    def testDepthOneKeepsChildrenNotGrandchildren(self):
        tree = sample()
        sliced = slice(tree["deploy"], 1)
        self.assertEqual(list(sliced.children), ["aws", "vercel"])
        self.assertEqual(sliced["aws"].children, {})
        self.assertEqual(sliced["aws"].descr, "AWS")
        self.assertIsNot(sliced, tree["deploy"])


if __name__ == "__main__":
    unittest.main()
