"""GraphQL documents sent to the GitHub API.

Values are always bound through variables, never formatted into the text.
"""

RESOLVE_BRANCH_HEAD = """
query ResolveBranchHead($owner: String!, $name: String!, $qualifiedName: String!) {
  repository(owner: $owner, name: $name) {
    ref(qualifiedName: $qualifiedName) {
      target {
        ... on Commit {
          history(first: 1) {
            nodes {
              oid
            }
          }
        }
      }
    }
  }
}
"""

CREATE_COMMIT_ON_BRANCH = """
mutation CreateCommitOnBranch($input: CreateCommitOnBranchInput!) {
  createCommitOnBranch(input: $input) {
    commit {
      oid
      url
    }
  }
}
"""
