"""Sample snippets, one per supported language."""

from typing import Dict

SAMPLE_CODE: Dict[str, str] = {
    "c": """#include <stdio.h>

int main() {
    int a = 10;
    int b = 20;
    int sum = a + b;
    if (sum > 25) {
        printf("big");
    }
    while (a < b) {
        a = a + 1;
    }
    printf("%d", sum);
    return 0;
}
""",
    "cpp": """#include <iostream>
using namespace std;

class Counter {
    int count;
};

int main() {
    int x = 5;
    int y = x * 2;
    if (y >= 10) {
        cout << y << endl;
    }
    return 0;
}
""",
    "java": """public class Main {
    public static void main(String[] args) {
        int x = 10;
        double rate = 2.5;
        int total = x * 3;
        while (total > 0) {
            total = total - 1;
        }
        System.out.println(total);
    }
}
""",
}
